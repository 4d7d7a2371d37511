"""
Server Identity

Name, version, MCP protocol revision, and the health payload shared by the
healthcheck tool and GET /health.
"""

import time
from datetime import datetime, timezone

from canvas_summarizer import __version__

SERVER_NAME = "CanvasApp MCP Summarizer"
SERVER_VERSION = __version__
PROTOCOL_VERSION = "2024-11-05"

# Track process start for uptime reporting
_started_at = time.monotonic()


def get_uptime_seconds() -> int:
    """Whole seconds since the process imported this module."""
    return int(time.monotonic() - _started_at)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_health_payload() -> dict:
    """
    Get current server health info.

    Returns:
        Dict with version, uptime (seconds), server_time
    """
    return {
        "version": SERVER_VERSION,
        "uptime": get_uptime_seconds(),
        "server_time": utc_timestamp(),
    }
