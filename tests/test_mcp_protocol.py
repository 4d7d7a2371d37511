"""
Tests for the JSON-RPC dispatcher.
"""

import json
import logging

import pytest

from canvas_summarizer.controllers.http.mcp_protocol import (
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    McpDispatcher,
    coerce_id,
)
from canvas_summarizer.server_info import PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from canvas_summarizer.webhook import PushResult


def _call(dispatcher, name=None, arguments=None, request_id=1):
    params = {}
    if name is not None:
        params["name"] = name
    if arguments is not None:
        params["arguments"] = arguments
    return dispatcher.handle_message({
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "tools/call",
        "params": params,
    })


def _text(response) -> str:
    return response["result"]["content"][0]["text"]


class TestEnvelope:
    """Tests for envelope validation."""

    def test_wrong_jsonrpc_version(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "1.0", "id": 7, "method": "tools/list"})

        assert response["id"] == 7
        assert response["error"]["code"] == INVALID_REQUEST
        assert response["error"]["message"] == "Invalid Request"

    def test_missing_jsonrpc_without_id(self, dispatcher):
        """Envelope errors are answered even without an id."""
        response = dispatcher.handle_message({"method": "tools/list"})

        assert response["id"] is None
        assert response["error"]["code"] == INVALID_REQUEST

    def test_missing_method(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": "abc"})

        assert response["id"] == "abc"
        assert response["error"]["code"] == INVALID_REQUEST
        assert response["error"]["data"] == "Missing method."

    def test_non_object_message(self, dispatcher):
        response = dispatcher.handle_message(42)

        assert response["id"] is None
        assert response["error"]["data"] == "Expected JSON object."

    @pytest.mark.parametrize(
        "raw,expected",
        [("a", "a"), (3, 3), (2.5, 2.5), (None, None), (True, None), ({"x": 1}, None), ([1], None)],
    )
    def test_coerce_id(self, raw, expected):
        assert coerce_id(raw) == expected


class TestNotifications:
    """Tests for notification semantics."""

    @pytest.mark.parametrize("method", ["initialized", "notifications/initialized"])
    def test_initialized_without_id_is_silent(self, dispatcher, method):
        assert dispatcher.handle_message({"jsonrpc": "2.0", "method": method}) is None

    @pytest.mark.parametrize("method", ["initialized", "notifications/initialized"])
    def test_initialized_with_id_is_acknowledged(self, dispatcher, method):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": 3, "method": method})

        assert response == {"jsonrpc": "2.0", "id": 3, "result": {}}

    def test_initialized_with_null_id_is_acknowledged(self, dispatcher):
        """An explicit null id still counts as request-style."""
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": None, "method": "initialized"})

        assert response == {"jsonrpc": "2.0", "id": None, "result": {}}

    @pytest.mark.parametrize("method", ["tools/list", "tools/call", "initialize", "notifications/cancelled", "bogus"])
    def test_other_methods_without_id_are_dropped(self, dispatcher, method):
        assert dispatcher.handle_message({"jsonrpc": "2.0", "method": method}) is None

    def test_unknown_method_with_id(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": 9, "method": "resources/list"})

        assert response["error"]["code"] == METHOD_NOT_FOUND
        assert response["error"]["data"] == {"method": "resources/list"}


class TestProtocolMethods:
    """Tests for initialize and tools/list."""

    def test_initialize(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})

        assert response["result"] == {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        }

    def test_tools_list(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})

        tools = response["result"]["tools"]
        assert [tool["name"] for tool in tools] == ["healthcheck", "summarize_context"]
        for tool in tools:
            assert tool["description"]
            assert tool["inputSchema"]["type"] == "object"
        assert tools[0]["inputSchema"]["properties"] == {}
        assert "context" in tools[1]["inputSchema"]["properties"]


class TestBatch:
    """Tests for batched payloads."""

    def test_notification_and_request(self, dispatcher):
        responses = dispatcher.handle_payload([
            {"jsonrpc": "2.0", "method": "initialized"},
            {"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
        ])

        assert len(responses) == 1
        assert responses[0]["id"] == 1
        assert "tools" in responses[0]["result"]

    def test_order_preserved(self, dispatcher):
        responses = dispatcher.handle_payload([
            {"jsonrpc": "2.0", "id": "b", "method": "tools/list"},
            {"jsonrpc": "1.0", "id": "a", "method": "tools/list"},
            {"jsonrpc": "2.0", "id": "c", "method": "initialize"},
        ])

        assert [r["id"] for r in responses] == ["b", "a", "c"]
        assert "error" in responses[1]

    def test_only_notifications(self, dispatcher):
        assert dispatcher.handle_payload([
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "method": "tools/list"},
        ]) is None

    def test_empty_batch(self, dispatcher):
        assert dispatcher.handle_payload([]) is None


class TestToolsCall:
    """Tests for tools/call routing."""

    def test_missing_tool_name(self, dispatcher):
        response = _call(dispatcher)

        assert "error" not in response
        assert response["result"]["isError"] is True
        assert _text(response) == "Validation error: tool name is required."

    def test_missing_params(self, dispatcher):
        response = dispatcher.handle_message({"jsonrpc": "2.0", "id": 1, "method": "tools/call"})

        assert response["result"]["isError"] is True

    def test_unknown_tool(self, dispatcher):
        response = _call(dispatcher, name="delete_everything")

        assert "error" not in response
        assert response["result"]["isError"] is True
        assert _text(response) == "Unknown tool: delete_everything"

    def test_healthcheck(self, dispatcher):
        response = _call(dispatcher, name="healthcheck", arguments={})

        assert response["result"]["isError"] is False
        payload = json.loads(_text(response))
        assert payload["version"] == SERVER_VERSION
        assert isinstance(payload["uptime"], int)
        assert payload["server_time"].endswith("Z")

    def test_summarize_not_configured(self, dispatcher, minimal_arguments):
        """With no webhook configured the push fails and the tool reports it."""
        response = _call(dispatcher, name="summarize_context", arguments=minimal_arguments)

        result = response["result"]
        assert result["isError"] is True
        assert _text(response).startswith("Doc push: failed")
        assert "not configured" in _text(response)

    def test_summarize_validation_error(self, settings, fake_pusher):
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        response = _call(
            dispatcher,
            name="summarize_context",
            arguments={"output_format": "memo", "context": {"summary": " "}, "extra": 1},
        )

        text = _text(response)
        assert response["result"]["isError"] is True
        assert text.startswith("Validation error:\n")
        lines = text.splitlines()[1:]
        assert "- context.summary: String should not be blank" in lines
        assert "- extra: Extra inputs are not permitted" in lines
        fake_pusher.push.assert_not_called()

    def test_summarize_non_object_arguments(self, settings, fake_pusher):
        """Non-object arguments are validated as an empty object."""
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        response = _call(dispatcher, name="summarize_context", arguments="please summarize")

        assert "- context: Field required" in _text(response)
        fake_pusher.push.assert_not_called()

    def test_summarize_success(self, settings, fake_pusher, full_arguments):
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        response = _call(dispatcher, name="summarize_context", arguments=full_arguments)

        assert response["result"] == {
            "content": [{"type": "text", "text": "Doc push: ok\nTitle: Acme weekly update"}],
            "isError": False,
        }
        fake_pusher.push.assert_called_once()
        pushed_text = fake_pusher.push.call_args.kwargs["text"]
        assert pushed_text.startswith("## Deal Summary")
        # The rendered summary is pushed, never returned
        assert "Deal Summary" not in _text(response)

    def test_summarize_push_failure(self, settings, fake_pusher, minimal_arguments):
        fake_pusher.push.return_value = PushResult.failure("Webhook HTTP 500: down", "http_status")
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        response = _call(dispatcher, name="summarize_context", arguments=minimal_arguments)

        assert response["result"]["isError"] is True
        assert _text(response) == "Doc push: failed\nWebhook HTTP 500: down"

    @pytest.mark.parametrize(
        "fields,title",
        [
            ({"doc_title": "Doc", "deal_name": "Name", "deal_id": "ID"}, "Doc"),
            ({"deal_name": "Name", "deal_id": "ID"}, "Name"),
            ({"deal_id": "ID"}, "ID"),
            ({}, "CanvasETL Summary"),
        ],
    )
    def test_title_precedence(self, settings, fake_pusher, minimal_arguments, fields, title):
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        _call(dispatcher, name="summarize_context", arguments={**minimal_arguments, **fields})

        assert fake_pusher.push.call_args.kwargs["title"] == title


class TestDiagnostics:
    """Tests for structured log entries."""

    def test_summarize_logs_counts_not_content(self, settings, fake_pusher, full_arguments, caplog):
        dispatcher = McpDispatcher(settings, pusher=fake_pusher)

        with caplog.at_level(logging.INFO, logger="canvas_summarizer"):
            _call(dispatcher, name="summarize_context", arguments=full_arguments, request_id=77)

        entries = [r.getMessage() for r in caplog.records if "mcp.tools.call.summarize_context" in r.getMessage()]
        assert len(entries) == 1
        fields = json.loads(entries[0].split(" ", 1)[1])
        assert fields["request_id"] == "77"
        assert fields["output_format"] == "se_deal_update"
        assert fields["key_points_count"] == 2
        assert fields["evidence_count"] == 1
        assert "Competitor pricing" not in caplog.text
        assert "Renewal in" not in caplog.text

    def test_notification_logged(self, dispatcher, caplog):
        with caplog.at_level(logging.INFO, logger="canvas_summarizer"):
            dispatcher.handle_message({"jsonrpc": "2.0", "method": "initialized"})

        assert "mcp.initialized" in caplog.text
        assert '"request_id": "notification"' in caplog.text
