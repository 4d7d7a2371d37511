"""
Summary Formatting

Renders a validated SummarizeRequest as deterministic Markdown.

Free text is whitespace-collapsed before it is written, list sections are
capped at MAX_SECTION_ITEMS entries with an overflow line, and every format
other than exec_bullets carries the structured request as a fenced JSON
block for downstream re-ingestion.
"""

import json
from typing import Callable, Sequence, TypeVar

from canvas_summarizer.configs.constants import MAX_SECTION_ITEMS
from canvas_summarizer.schemas import NextStep, OpenQuestion, Risk, Stakeholder, SummarizeRequest

T = TypeVar("T")

PAYLOAD_HEADING = "### Structured Payload (for ETL)"


def clean(text: str) -> str:
    """Collapse whitespace runs (newlines included) to single spaces and trim."""
    return " ".join(text.split())


def _meta_suffix(pairs: Sequence[tuple[str, str | None]]) -> str:
    meta = [f"{label}: {clean(value)}" for label, value in pairs if value]
    return f" ({'; '.join(meta)})" if meta else ""


def format_section(items: Sequence[T], render: Callable[[T], str]) -> str:
    """
    Render a list section as Markdown bullets.

    Args:
        items: Section entries (all validated entries, uncapped)
        render: Formats one entry as a bullet line

    Returns:
        "- None" for an empty section, otherwise at most MAX_SECTION_ITEMS
        lines followed by "- ... (+N more)" when entries were left out
    """
    if not items:
        return "- None"
    lines = [render(item) for item in items[:MAX_SECTION_ITEMS]]
    remaining = len(items) - MAX_SECTION_ITEMS
    if remaining > 0:
        lines.append(f"- ... (+{remaining} more)")
    return "\n".join(lines)


def _key_point_line(point: str) -> str:
    return f"- {clean(point)}"


def _question_line(item: OpenQuestion) -> str:
    return f"- {clean(item.question)}" + _meta_suffix([("Owner", item.owner), ("Due", item.due)])


def _next_step_line(item: NextStep) -> str:
    meta = [f"Status: {item.status}"]
    if item.owner:
        meta.append(f"Owner: {clean(item.owner)}")
    if item.due:
        meta.append(f"Due: {clean(item.due)}")
    return f"- {clean(item.action)} ({'; '.join(meta)})"


def _risk_line(item: Risk) -> str:
    mitigation = f" (Mitigation: {clean(item.mitigation)})" if item.mitigation else ""
    return f"- [{item.severity.upper()}] {clean(item.risk)}{mitigation}"


def _stakeholder_line(item: Stakeholder) -> str:
    return f"- {clean(item.name)}" + _meta_suffix([("Role", item.role), ("Influence", item.influence)])


def deal_label(request: SummarizeRequest) -> str:
    """Deal identity: deal_name, then deal_id, then "Unspecified"."""
    return request.deal_name or request.deal_id or "Unspecified"


def format_summary(request: SummarizeRequest) -> str:
    """
    Render the summary document.

    Args:
        request: Validated request

    Returns:
        Markdown text; identical input always yields identical output
    """
    context = request.context
    lines = [
        "## Deal Summary",
        f"- Deal: {clean(deal_label(request))}",
        f"- Summary: {clean(context.summary)}",
    ]
    if request.deal_name and request.deal_id:
        lines.append(f"- Deal ID: {clean(request.deal_id)}")
    if request.source_canvas_name:
        lines.append(f"- Source Canvas: {clean(request.source_canvas_name)}")
    if context.last_updated:
        lines.append(f"- Last Updated: {clean(context.last_updated)}")

    sections = [
        ("Key Points", format_section(context.key_points, _key_point_line)),
        ("Risks", format_section(context.risks, _risk_line)),
        ("Open Questions", format_section(context.open_questions, _question_line)),
        ("Next Steps", format_section(context.next_steps, _next_step_line)),
        ("Stakeholders", format_section(context.stakeholders, _stakeholder_line)),
    ]
    for heading, body in sections:
        lines.extend(["", f"## {heading}", body])

    if request.output_format != "exec_bullets":
        lines.extend([
            "",
            PAYLOAD_HEADING,
            "```json",
            json.dumps(request.to_payload(), indent=2, ensure_ascii=False),
            "```",
        ])

    return "\n".join(lines)
