"""
MCP Tools

Tool implementations invoked by the JSON-RPC dispatcher.
"""

from canvas_summarizer.tools.base import MCPToolResult, ToolContext
from canvas_summarizer.tools.healthcheck import healthcheck
from canvas_summarizer.tools.summarize import summarize_context

__all__ = [
    "MCPToolResult",
    "ToolContext",
    "healthcheck",
    "summarize_context",
]
