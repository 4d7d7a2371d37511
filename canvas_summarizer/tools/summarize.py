"""
Summarize Context Tool

Validates deal context, renders it as Markdown, and pushes the document to
the configured webhook. Only the push status and title are returned to the
caller; the rendered text goes to the sink alone.
"""

import logging
from typing import Any

from canvas_summarizer.configs import DEFAULT_DOC_TITLE, get_logger, log_event
from canvas_summarizer.formatting import format_summary
from canvas_summarizer.schemas import SummarizeRequest, format_violations, validate_summarize_input
from canvas_summarizer.tools.base import MCPToolResult, ToolContext

logger = get_logger("tools.summarize")

CONTEXT_LISTS = ("key_points", "open_questions", "next_steps", "risks", "stakeholders", "evidence")


def resolve_title(request: SummarizeRequest) -> str:
    """Pick the document title: doc_title, deal_name, deal_id, then the default."""
    return request.doc_title or request.deal_name or request.deal_id or DEFAULT_DOC_TITLE


def context_stats(request: SummarizeRequest) -> dict[str, int]:
    """Entry counts for each context list, keyed `<list>_count`."""
    return {f"{name}_count": len(getattr(request.context, name)) for name in CONTEXT_LISTS}


def summarize_context(arguments: dict[str, Any], ctx: ToolContext) -> MCPToolResult:
    """
    Validate, render, and push a deal summary.

    Args:
        arguments: Raw tools/call arguments
        ctx: Per-call context (request id, pusher)

    Returns:
        Tool result; isError is set on validation or push failure
    """
    result = validate_summarize_input(arguments)
    if not result.ok:
        log_event(
            logger,
            logging.WARNING,
            "mcp.tools.call.validation_error",
            request_id=ctx.request_id,
            tool="summarize_context",
            violation_count=len(result.violations),
        )
        return MCPToolResult.error(f"Validation error:\n{format_violations(result.violations)}")

    request = result.request
    summary_text = format_summary(request)
    title = resolve_title(request)

    push = ctx.pusher.push(title=title, text=summary_text)
    if push.ok:
        log_event(logger, logging.INFO, "mcp.doc_push.ok", request_id=ctx.request_id)
    else:
        log_event(
            logger,
            logging.ERROR,
            "mcp.doc_push.failed",
            request_id=ctx.request_id,
            reason=push.reason,
            error=push.error,
        )

    log_event(
        logger,
        logging.INFO,
        "mcp.tools.call.summarize_context",
        request_id=ctx.request_id,
        tool="summarize_context",
        output_format=request.output_format,
        **context_stats(request),
    )

    if push.ok:
        return MCPToolResult.text(f"Doc push: ok\nTitle: {title}")
    return MCPToolResult.error(f"Doc push: failed\n{push.error}")
