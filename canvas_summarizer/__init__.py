"""
Canvas Summarizer - an MCP tool server that turns deal context into Markdown.

This package validates structured deal context sent by a model client,
renders it as a deterministic Markdown summary, and pushes the result to an
external document webhook.
"""

__version__ = "0.1.0"
