"""
Canvas Summarizer HTTP Server

FastAPI app exposing the MCP JSON-RPC endpoint and a health endpoint.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from canvas_summarizer.configs import Settings, get_logger
from canvas_summarizer.controllers.http.mcp_protocol import McpDispatcher
from canvas_summarizer.controllers.http.mcp_protocol import router as mcp_router
from canvas_summarizer.server_info import SERVER_NAME, SERVER_VERSION, get_health_payload
from canvas_summarizer.webhook import DocWebhookPusher

logger = get_logger("http")


def create_app(
    settings: Optional[Settings] = None,
    pusher: Optional[DocWebhookPusher] = None,
) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        settings: Server configuration (defaults to Settings.from_env())
        pusher: Webhook pusher override (defaults to one built from settings)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title=SERVER_NAME,
        description="MCP tool server that renders deal context and pushes it to a document webhook",
        version=SERVER_VERSION,
    )
    app.state.settings = settings
    app.state.dispatcher = McpDispatcher(settings, pusher=pusher)

    app.include_router(mcp_router, tags=["mcp"])

    @app.get("/health")
    def health() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(get_health_payload(), headers={"Cache-Control": "no-store"})

    return app


def run_server(settings: Optional[Settings] = None) -> None:
    """Run the FastAPI server."""
    import uvicorn

    if settings is None:
        settings = Settings.from_env()
    logger.info(
        f"Starting HTTP server on {settings.host}:{settings.port} "
        f"(base_url_configured={settings.base_url_configured}, "
        f"webhook_configured={settings.webhook_configured})"
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="warning")
