"""
Canvas Summarizer Settings

Process-wide configuration read once at startup and passed explicitly to
the HTTP app, dispatcher and webhook pusher. Nothing reads the environment
after Settings.from_env() has run.

Environment variables:
    APP_BASE_URL: Public base URL of the deployment (reported in logs only)
    DOC_WEBHOOK_URL: Destination document webhook
    DOC_WEBHOOK_TOKEN: Shared secret sent with every push
    DOC_WEBHOOK_TIMEOUT: Push timeout in seconds (default: 15)
    SUMMARIZER_HTTP_HOST: Bind address (default: 0.0.0.0)
    SUMMARIZER_HTTP_PORT: Bind port (default: 8080)
"""

import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from canvas_summarizer.configs.constants import get_timeout
from canvas_summarizer.exceptions import ConfigurationError


def _env(environ: Mapping[str, str], key: str) -> Optional[str]:
    """Read a variable, treating empty strings as unset."""
    value = environ.get(key, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Immutable server configuration."""

    base_url: Optional[str] = None
    doc_webhook_url: Optional[str] = None
    doc_webhook_token: Optional[str] = field(default=None, repr=False)
    webhook_timeout: float = get_timeout("webhook_push")
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def base_url_configured(self) -> bool:
        return bool(self.base_url)

    @property
    def webhook_configured(self) -> bool:
        """Both the destination URL and the token are required to push."""
        return bool(self.doc_webhook_url and self.doc_webhook_token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: A numeric variable could not be parsed or is out of range
        """
        if environ is None:
            environ = os.environ

        timeout_raw = _env(environ, "DOC_WEBHOOK_TIMEOUT")
        port_raw = _env(environ, "SUMMARIZER_HTTP_PORT")
        try:
            webhook_timeout = float(timeout_raw) if timeout_raw else get_timeout("webhook_push")
            port = int(port_raw) if port_raw else 8080
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e
        if not math.isfinite(webhook_timeout) or webhook_timeout <= 0:
            raise ConfigurationError(
                "DOC_WEBHOOK_TIMEOUT must be a positive finite number", {"value": timeout_raw}
            )

        return cls(
            base_url=_env(environ, "APP_BASE_URL"),
            doc_webhook_url=_env(environ, "DOC_WEBHOOK_URL"),
            doc_webhook_token=_env(environ, "DOC_WEBHOOK_TOKEN"),
            webhook_timeout=webhook_timeout,
            host=_env(environ, "SUMMARIZER_HTTP_HOST") or "0.0.0.0",
            port=port,
        )
