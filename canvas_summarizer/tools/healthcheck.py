"""
Healthcheck Tool

Reports server version, uptime, and server time.
"""

import json

from canvas_summarizer.server_info import get_health_payload
from canvas_summarizer.tools.base import MCPToolResult, ToolContext


def healthcheck(arguments: dict, ctx: ToolContext) -> MCPToolResult:
    """Arguments are accepted and ignored."""
    return MCPToolResult.text(json.dumps(get_health_payload(), indent=2))
