"""
Tool Plumbing

Result model and per-call context shared by every MCP tool.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from canvas_summarizer.configs import Settings
from canvas_summarizer.webhook import DocWebhookPusher


class MCPToolResult(BaseModel):
    """Result payload for an MCP tools/call response."""

    content: list[dict[str, Any]]
    isError: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "MCPToolResult":
        """Build a single text-content result."""
        return cls(content=[{"type": "text", "text": text}], isError=is_error)

    @classmethod
    def error(cls, text: str) -> "MCPToolResult":
        """Tool-level failure, reported inside a successful JSON-RPC result."""
        return cls.text(text, is_error=True)


@dataclass(frozen=True)
class ToolContext:
    """Per-call collaborators handed to a tool."""

    request_id: str
    settings: Settings
    pusher: DocWebhookPusher
