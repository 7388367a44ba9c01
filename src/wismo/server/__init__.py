"""Inbound protocol surface: the MCP streamable-HTTP endpoint."""

from .app import McpEndpoint, OrjsonResponse, create_app, main
from .protocol import build_server, rejection_error

__all__ = ["McpEndpoint", "OrjsonResponse", "build_server", "create_app", "main", "rejection_error"]
