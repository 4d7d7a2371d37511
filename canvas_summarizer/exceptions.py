"""
Canvas Summarizer Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All project-specific exceptions inherit from SummarizerError.

Usage:
    from canvas_summarizer.exceptions import ClientError, MissingConfigError

    try:
        response = http_post(url, json=payload)
    except ClientError as e:
        logger.error(f"Push failed: {e}")
"""


class SummarizerError(Exception):
    """Base exception for all Canvas Summarizer errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SummarizerError):
    """Error in server configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


# =============================================================================
# HTTP/Client Errors
# =============================================================================


class ClientError(SummarizerError):
    """Base class for outbound HTTP client errors."""

    pass


class HTTPRequestError(ClientError):
    """HTTP request could not be sent."""

    pass


class HTTPConnectionError(ClientError):
    """Failed to connect to HTTP endpoint."""

    pass


class HTTPTimeoutError(ClientError):
    """HTTP request timed out."""

    pass
