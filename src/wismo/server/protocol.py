"""MCP tool surface built on the SDK's low-level ``Server``.

``tools/list`` advertises the registry; ``tools/call`` dispatches through it.
Initialize, ping and notifications are answered by the SDK session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from wismo.observability import get_logger, log_context

if TYPE_CHECKING:
    from wismo.foundation.config import ServerSettings
    from wismo.foundation.errors import ToolError
    from wismo.foundation.registry import ToolRegistry

log = get_logger("wismo.server")

# Fixed bodies sent by the HTTP wrapper, outside any JSON-RPC exchange
METHOD_NOT_ALLOWED = {"jsonrpc": "2.0", "error": {"code": -32000, "message": "Method not allowed."}, "id": None}
INTERNAL_ERROR = {"jsonrpc": "2.0", "error": {"code": types.INTERNAL_ERROR, "message": "Internal server error"}, "id": None}


def rejection_error(rejection: ToolError) -> McpError:
    """JSON-RPC invalid-params error for a call the registry refused."""
    return McpError(types.ErrorData(
        code=types.INVALID_PARAMS,
        message=rejection.message,
        data={"code": str(rejection.code), "tool": rejection.tool_name},
    ))


def build_server(registry: ToolRegistry, settings: ServerSettings) -> Server:
    """Low-level MCP server answering from ``registry``.

    Example:
        >>> server = build_server(registry, settings.server)
        >>> manager = StreamableHTTPSessionManager(app=server, stateless=True, json_response=True)
    """
    server: Server = Server(settings.name, version=settings.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool.model_validate(spec) for spec in registry.list_tools()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        with log_context(tool=name):
            log.info("tools/call received")
            envelope = await registry.execute(name, request.params.arguments)
        if envelope.rejection is not None:
            raise rejection_error(envelope.rejection)
        return types.ServerResult(envelope.to_result())

    # The call_tool() decorator folds every raised error into an isError result;
    # rejections must stay JSON-RPC errors, so the request handler is set directly
    server.request_handlers[types.CallToolRequest] = call_tool
    return server
