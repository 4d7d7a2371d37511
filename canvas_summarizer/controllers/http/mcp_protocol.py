"""
MCP Protocol Endpoint

JSON-RPC 2.0 endpoint for MCP clients. A POST body is either a single
envelope or a batch (array) of envelopes; batch entries are handled in order
and notifications produce no response.

Tools:
1. healthcheck - Server version, uptime, and time
2. summarize_context - Render deal context and push it to the doc webhook

Errors are reported on two levels. Protocol problems (bad envelope, unknown
method) become JSON-RPC error objects. Tool problems (bad arguments, unknown
tool, failed push) become successful results with isError set, so the
calling model can see and react to them.
"""

import json
import logging
import math
from typing import Any, Callable, Optional, Union

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from canvas_summarizer.configs import Settings, get_logger, log_event
from canvas_summarizer.schemas import summarize_input_schema
from canvas_summarizer.server_info import PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from canvas_summarizer.tools import MCPToolResult, ToolContext, healthcheck, summarize_context
from canvas_summarizer.webhook import DocWebhookPusher

logger = get_logger("http.mcp")

router = APIRouter()

JsonRpcId = Union[str, int, float, None]

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601

INITIALIZED_METHODS = ("initialized", "notifications/initialized")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Cache-Control": "no-store",
}


# --- Envelope Helpers ---


def make_result(request_id: JsonRpcId, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def make_error(
    request_id: JsonRpcId,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def coerce_id(value: Any) -> JsonRpcId:
    """Keep string and numeric ids; anything else (booleans included) becomes null."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


def _id_label(request_id: JsonRpcId) -> str:
    # Matches the JSON spelling so log correlation ids line up with the wire
    if request_id is None:
        return "null"
    return str(request_id)


# --- Tool Registry ---


class ToolDef:
    """Definition of an MCP tool with its function, input schema, and description."""

    def __init__(
        self,
        name: str,
        fn: Callable[[dict, ToolContext], MCPToolResult],
        input_schema: dict[str, Any],
        description: str,
    ):
        self.name = name
        self.fn = fn
        self.input_schema = input_schema
        self.description = description

    def schema(self) -> dict:
        """MCP-compatible tool definition."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def build_tool_registry() -> dict[str, ToolDef]:
    """Build the tool registry keyed by tool name."""
    tools = [
        ToolDef(
            name="healthcheck",
            fn=healthcheck,
            input_schema={"type": "object", "properties": {}, "additionalProperties": False},
            description="Return server version, uptime, and server_time.",
        ),
        ToolDef(
            name="summarize_context",
            fn=summarize_context,
            input_schema=summarize_input_schema(),
            description=(
                "Read the full relevant conversation context and (if specified) the canvas named "
                "source_canvas_name before calling this tool. "
                "Do not ask the user to paste anything. "
                "Prefer structured extraction; keep evidence excerpts short and minimal. "
                "If the canvas name is provided, prioritize the canvas for canonical fields, "
                "and use the chat for recent deltas."
            ),
        ),
    ]
    return {tool.name: tool for tool in tools}


# --- Dispatcher ---


class McpDispatcher:
    """
    Routes JSON-RPC envelopes to protocol handlers and tools.

    Holds no per-request state; one instance serves every request.
    """

    def __init__(self, settings: Settings, pusher: Optional[DocWebhookPusher] = None):
        self.settings = settings
        self.pusher = pusher or DocWebhookPusher(settings)
        self.tools = build_tool_registry()

    def handle_payload(self, payload: Any) -> Optional[Union[dict, list]]:
        """
        Handle a decoded request body.

        Args:
            payload: A single envelope or a list of envelopes

        Returns:
            Response envelope, list of envelopes in request order, or None
            when nothing warrants a response
        """
        if isinstance(payload, list):
            responses = []
            for message in payload:
                response = self.handle_message(message)
                if response is not None:
                    responses.append(response)
            return responses or None
        return self.handle_message(payload)

    def handle_message(self, message: Any) -> Optional[dict]:
        """Handle one envelope; returns None for notifications."""
        if not isinstance(message, dict):
            log_event(logger, logging.WARNING, "mcp.invalid_request", reason="not_an_object")
            return make_error(None, INVALID_REQUEST, "Invalid Request", "Expected JSON object.")

        has_id = "id" in message
        request_id = coerce_id(message.get("id"))
        label = _id_label(request_id) if has_id else "notification"

        if message.get("jsonrpc") != "2.0":
            log_event(logger, logging.WARNING, "mcp.invalid_request", request_id=label, reason="jsonrpc")
            return make_error(request_id, INVALID_REQUEST, "Invalid Request", "Missing jsonrpc: '2.0'.")

        method = message.get("method")
        if not isinstance(method, str) or not method:
            log_event(logger, logging.WARNING, "mcp.invalid_request", request_id=label, reason="method")
            return make_error(request_id, INVALID_REQUEST, "Invalid Request", "Missing method.")

        if method in INITIALIZED_METHODS:
            log_event(logger, logging.INFO, "mcp.initialized", request_id=label, method=method)
            return make_result(request_id, {}) if has_id else None

        if not has_id:
            log_event(logger, logging.WARNING, "mcp.notification.ignored", request_id=label, method=method)
            return None

        if method == "initialize":
            log_event(
                logger,
                logging.INFO,
                "mcp.initialize",
                request_id=label,
                method=method,
                base_url_configured=self.settings.base_url_configured,
            )
            return make_result(request_id, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            })

        if method == "tools/list":
            log_event(
                logger,
                logging.INFO,
                "mcp.tools.list",
                request_id=label,
                method=method,
                tool_count=len(self.tools),
            )
            return make_result(request_id, {"tools": [tool.schema() for tool in self.tools.values()]})

        if method == "tools/call":
            params = message.get("params")
            result = self.call_tool(params if isinstance(params, dict) else {}, label)
            return make_result(request_id, result.model_dump())

        log_event(logger, logging.WARNING, "mcp.method.not_found", request_id=label, method=method)
        return make_error(request_id, METHOD_NOT_FOUND, "Method not found", {"method": method})

    def call_tool(self, params: dict[str, Any], request_id: str) -> MCPToolResult:
        """
        Execute a tools/call request.

        Args:
            params: tools/call params ({name, arguments})
            request_id: Correlation id for logging

        Returns:
            Tool result; failures are reported via isError, never raised
        """
        name = params.get("name")
        arguments = params.get("arguments")
        if not isinstance(arguments, dict):
            arguments = {}

        if not isinstance(name, str) or not name:
            log_event(logger, logging.WARNING, "mcp.tools.call.invalid", request_id=request_id, method="tools/call")
            return MCPToolResult.error("Validation error: tool name is required.")

        tool = self.tools.get(name)
        if tool is None:
            log_event(
                logger,
                logging.WARNING,
                "mcp.tools.call.unknown_tool",
                request_id=request_id,
                method="tools/call",
                tool=name,
            )
            return MCPToolResult.error(f"Unknown tool: {name}")

        log_event(logger, logging.INFO, "mcp.tools.call", request_id=request_id, method="tools/call", tool=name)
        ctx = ToolContext(request_id=request_id, settings=self.settings, pusher=self.pusher)
        return tool.fn(arguments, ctx)


# --- Endpoints ---


class AsciiJSONResponse(JSONResponse):
    """JSON response escaped to ASCII; echoed client strings may hold lone surrogates."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=True, allow_nan=False, separators=(",", ":")).encode("ascii")


def _json_response(body: Any, status_code: int = 200) -> JSONResponse:
    return AsciiJSONResponse(content=body, status_code=status_code, headers=CORS_HEADERS)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON token: {token}")


def _no_content() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post("/mcp")
async def mcp_endpoint(request: Request) -> Response:
    """
    Handle a JSON-RPC request body.

    Returns:
        200 with the response envelope(s), 204 when nothing warrants a
        response, 400 when the body is not valid JSON
    """
    raw = await request.body()
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        log_event(logger, logging.ERROR, "mcp.parse_error", error=str(e))
        return _json_response(make_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    dispatcher: McpDispatcher = request.app.state.dispatcher
    # The webhook push blocks; keep it off the event loop
    response = await run_in_threadpool(dispatcher.handle_payload, payload)
    if response is None:
        return _no_content()
    return _json_response(response)


@router.options("/mcp")
def mcp_preflight() -> Response:
    """CORS preflight."""
    return _no_content()
