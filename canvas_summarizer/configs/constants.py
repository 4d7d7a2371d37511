"""
Canvas Summarizer Constants

Static configuration values that rarely change: rendering limits,
webhook payload constants, and timeout configuration.
"""

# --- Rendering Limits ---

MAX_SECTION_ITEMS = 8  # List entries rendered per Markdown section
MAX_LOG_STRING_LENGTH = 120  # Longest string value written to a log entry
MAX_WEBHOOK_ERROR_BODY = 300  # Response body characters kept in push errors

# --- Webhook Payload ---

WEBHOOK_SOURCE = "CanvasETL"
DEFAULT_DOC_TITLE = "CanvasETL Summary"

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    # HTTP requests
    "http_default": 10,  # Default HTTP request timeout
    "webhook_push": 15,  # Document webhook push (single attempt)
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS.get("http_default", 10)
    return TIMEOUTS.get(key, default)
