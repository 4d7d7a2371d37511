"""
Document Webhook Pusher

Delivers a rendered summary to the external document sink with a single
POST. The sink answers successful writes with a redirect, so 3xx counts as
success and redirects are never followed. No retries.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from canvas_summarizer.configs import (
    MAX_WEBHOOK_ERROR_BODY,
    WEBHOOK_SOURCE,
    Settings,
    get_logger,
)
from canvas_summarizer.exceptions import (
    ClientError,
    HTTPConnectionError,
    HTTPTimeoutError,
    MissingConfigError,
)
from canvas_summarizer.utils.http_client import http_post

logger = get_logger("webhook")

FailureReason = Literal["not_configured", "http_status", "transport"]

NOT_CONFIGURED_MESSAGE = "DOC_WEBHOOK_URL / DOC_WEBHOOK_TOKEN not configured."


@dataclass(frozen=True)
class PushResult:
    """Outcome of a single push attempt."""

    ok: bool
    error: Optional[str] = None
    reason: Optional[FailureReason] = None

    @classmethod
    def success(cls) -> "PushResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str, reason: FailureReason) -> "PushResult":
        return cls(ok=False, error=error, reason=reason)


class DocWebhookPusher:
    """Pushes summaries to the configured document webhook."""

    def __init__(self, settings: Settings):
        self._url = settings.doc_webhook_url
        self._token = settings.doc_webhook_token
        self._timeout = settings.webhook_timeout

    @property
    def configured(self) -> bool:
        return bool(self._url and self._token)

    def _destination(self) -> tuple[str, str]:
        if not self.configured:
            raise MissingConfigError(NOT_CONFIGURED_MESSAGE)
        return self._url, self._token

    def _transport_error_text(self, error: ClientError) -> str:
        # The webhook URL acts as a credential; it stays in the log only
        if isinstance(error, HTTPTimeoutError):
            return f"Webhook request timed out after {self._timeout}s"
        if isinstance(error, HTTPConnectionError):
            return "Webhook connection failed"
        return "Webhook request failed"

    def push(self, title: str, text: str) -> PushResult:
        """
        Send one document to the sink.

        Args:
            title: Document title
            text: Rendered Markdown body

        Returns:
            PushResult; transport and configuration problems are reported
            here rather than raised
        """
        try:
            url, token = self._destination()
        except MissingConfigError as e:
            logger.warning("Doc webhook not configured, skipping push")
            return PushResult.failure(str(e), "not_configured")

        payload = {
            "token": token,
            "title": title,
            "text": text,
            "source": WEBHOOK_SOURCE,
        }

        try:
            response = http_post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                follow_redirects=False,
            )
        except ClientError as e:
            logger.error(f"Doc webhook transport failure: {e}")
            return PushResult.failure(self._transport_error_text(e), "transport")

        if 200 <= response.status_code < 400:
            logger.debug(f"Doc webhook accepted push: HTTP {response.status_code}")
            return PushResult.success()

        body = response.text or ""
        return PushResult.failure(
            f"Webhook HTTP {response.status_code}: {body[:MAX_WEBHOOK_ERROR_BODY]}",
            "http_status",
        )
