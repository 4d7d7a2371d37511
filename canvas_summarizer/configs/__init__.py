"""
Canvas Summarizer Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from canvas_summarizer.configs.logging import get_logger, log_event, setup_logging, truncate_for_log

# Constants
from canvas_summarizer.configs.constants import (
    DEFAULT_DOC_TITLE,
    MAX_LOG_STRING_LENGTH,
    MAX_SECTION_ITEMS,
    MAX_WEBHOOK_ERROR_BODY,
    TIMEOUTS,
    WEBHOOK_SOURCE,
    get_timeout,
)

# Settings
from canvas_summarizer.configs.settings import Settings

__all__ = [
    # Logging
    "get_logger",
    "log_event",
    "setup_logging",
    "truncate_for_log",
    # Constants
    "DEFAULT_DOC_TITLE",
    "MAX_LOG_STRING_LENGTH",
    "MAX_SECTION_ITEMS",
    "MAX_WEBHOOK_ERROR_BODY",
    "TIMEOUTS",
    "WEBHOOK_SOURCE",
    "get_timeout",
    # Settings
    "Settings",
]
