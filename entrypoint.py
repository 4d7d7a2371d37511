#!/usr/bin/env python3
"""
Canvas Summarizer Entrypoint

Configures logging, reads settings from the environment once, and starts
the HTTP server.

Usage:
    python entrypoint.py
"""

import sys


def main():
    from canvas_summarizer.configs import Settings, get_logger, setup_logging
    from canvas_summarizer.controllers.http import run_server
    from canvas_summarizer.exceptions import ConfigurationError

    # Initialize logging (must be called before get_logger)
    setup_logging()
    logger = get_logger("entrypoint")

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if not settings.webhook_configured:
        logger.warning("DOC_WEBHOOK_URL / DOC_WEBHOOK_TOKEN not set; summarize_context pushes will fail")

    run_server(settings)


if __name__ == "__main__":
    main()
