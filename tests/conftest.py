"""
Pytest fixtures for Canvas Summarizer tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

WEBHOOK_URL = "https://hooks.example.com/exec"
WEBHOOK_TOKEN = "test-token"


@pytest.fixture
def minimal_arguments() -> dict:
    """Smallest valid summarize_context arguments (every list omitted)."""
    return {
        "output_format": "exec_bullets",
        "context": {"summary": "Renewal in negotiation"},
    }


@pytest.fixture
def full_arguments() -> dict:
    """summarize_context arguments exercising every field."""
    return {
        "deal_id": "D-1042",
        "deal_name": "Acme Renewal",
        "source_canvas_name": "Acme Deal Canvas",
        "doc_title": "Acme weekly update",
        "output_format": "se_deal_update",
        "context": {
            "summary": "Renewal in   negotiation,\nprocurement engaged",
            "key_points": ["Budget approved", "Security review\n pending"],
            "open_questions": [
                {"question": "Who signs?", "owner": "Dana", "due": "2025-03-01"},
                {"question": "Multi-year discount?"},
            ],
            "next_steps": [
                {"action": "Send redlines", "owner": "Sam", "due": "Friday", "status": "open"},
                {"action": "Kickoff call", "status": "done"},
            ],
            "risks": [
                {"risk": "Competitor pricing", "severity": "high", "mitigation": "Offer bundle"},
                {"risk": "Legal delay", "severity": "low"},
            ],
            "stakeholders": [
                {"name": "Dana Lee", "role": "CFO", "influence": "Decision maker"},
                {"name": "Sam Ortiz"},
            ],
            "evidence": [
                {"type": "conversation", "pointer": "msg-12", "excerpt": "We can sign in March"},
            ],
            "last_updated": "2025-02-14",
        },
    }


@pytest.fixture
def settings():
    """Settings with no webhook destination."""
    from canvas_summarizer.configs import Settings

    return Settings()


@pytest.fixture
def configured_settings():
    """Settings with a webhook destination."""
    from canvas_summarizer.configs import Settings

    return Settings(
        base_url="https://summarizer.example.com",
        doc_webhook_url=WEBHOOK_URL,
        doc_webhook_token=WEBHOOK_TOKEN,
        webhook_timeout=5,
    )


@pytest.fixture
def fake_pusher():
    """Pusher double that records pushes and reports success."""
    from canvas_summarizer.webhook import DocWebhookPusher, PushResult

    pusher = MagicMock(spec=DocWebhookPusher)
    pusher.push.return_value = PushResult.success()
    return pusher


@pytest.fixture
def dispatcher(settings):
    """Dispatcher with webhook configuration absent."""
    from canvas_summarizer.controllers.http.mcp_protocol import McpDispatcher

    return McpDispatcher(settings)


@pytest.fixture
def client(settings):
    """Test client for the HTTP app with webhook configuration absent."""
    from fastapi.testclient import TestClient

    from canvas_summarizer.controllers.http import create_app

    return TestClient(create_app(settings))
