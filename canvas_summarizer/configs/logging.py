"""
Canvas Summarizer Logging Configuration

Configures logging based on environment variables:
- SUMMARIZER_DEBUG: Enable debug logging (default: false)
- SUMMARIZER_LOG_FILE: Optional log file path (default: stderr only)

Diagnostic entries are written with log_event(), which never lets raw
payload content reach the log: strings are whitespace-normalized and cut to
120 characters, lists and objects are reduced to placeholders.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from canvas_summarizer.configs.constants import MAX_LOG_STRING_LENGTH


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the summarizer.

    Args:
        debug: Enable debug level. Defaults to SUMMARIZER_DEBUG env var.
        log_file: Log file path. Defaults to SUMMARIZER_LOG_FILE env var.
                  When unset, everything goes to stderr.

    Returns:
        Root logger for canvas_summarizer
    """
    # Read from env if not provided
    if debug is None:
        debug = os.environ.get("SUMMARIZER_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("SUMMARIZER_LOG_FILE") or None

    # Set log level
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter with component tags
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Get root summarizer logger
    logger = logging.getLogger("canvas_summarizer")
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    if log_file:
        # If logging to file, only show warnings on stderr
        stderr_handler.setLevel(logging.WARNING)
    else:
        stderr_handler.setLevel(level)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "http.mcp", "webhook")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"canvas_summarizer.{component}")


def truncate_for_log(value: str, limit: int = MAX_LOG_STRING_LENGTH) -> str:
    """Collapse whitespace and cut a string to `limit` characters plus an ellipsis."""
    normalized = " ".join(value.split())
    if len(normalized) <= limit:
        return normalized
    return f"{normalized[:limit]}..."


def _safe_value(value: Any) -> Any:
    if isinstance(value, str):
        return truncate_for_log(value)
    if isinstance(value, (list, tuple)):
        return f"array(len={len(value)})"
    if isinstance(value, dict):
        return "[object]"
    return value


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """
    Write a structured diagnostic entry.

    Args:
        logger: Component logger
        level: logging level (logging.INFO, logging.WARNING, ...)
        event: Dotted event name, e.g. "mcp.tools.list"
        **fields: Correlation data; sanitized before formatting
    """
    if not logger.isEnabledFor(level):
        return
    sanitized = {key: _safe_value(value) for key, value in fields.items()}
    logger.log(level, f"{event} {json.dumps(sanitized, default=str)}")
