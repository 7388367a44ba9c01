"""ASGI application and process entry point.

Serves the MCP tool surface at one stateless endpoint (default ``/mcp``)
through the SDK's streamable-HTTP session manager. POST carries JSON-RPC
messages; every other verb is refused with a fixed 405 body.

Example:
    >>> app = create_app(gateway=FakeGateway())
    >>> uvicorn.run(app, host="127.0.0.1", port=3000)
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

import orjson
import uvicorn
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from wismo.foundation.config import WismoSettings, get_settings
from wismo.foundation.registry import ToolRegistry, create_registry
from wismo.gateway import HttpGateway
from wismo.observability import configure_logging, get_logger

from .protocol import INTERNAL_ERROR, METHOD_NOT_ALLOWED, build_server

if TYPE_CHECKING:
    from starlette.types import Message, Receive, Scope, Send

    from wismo.gateway import BackendGateway

log = get_logger("wismo.server")


class OrjsonResponse(JSONResponse):
    """JSONResponse rendered with orjson."""

    def render(self, content: Any) -> bytes:
        return orjson.dumps(content)


class McpEndpoint:
    """ASGI endpoint: POST goes to the session manager, anything else gets 405.

    Mounted as a raw ASGI app so the route matches every verb.
    """

    def __init__(self, manager: StreamableHTTPSessionManager) -> None:
        self.manager = manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["method"] != "POST":
            log.info("method not allowed", http_method=scope["method"])
            await OrjsonResponse(METHOD_NOT_ALLOWED, status_code=405)(scope, receive, send)
            return

        started = False

        async def tracking_send(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.manager.handle_request(scope, receive, tracking_send)
        except Exception:
            log.exception("unhandled error in request")
            if not started:
                await OrjsonResponse(INTERNAL_ERROR, status_code=500)(scope, receive, send)


def create_app(
    settings: WismoSettings | None = None,
    *,
    gateway: BackendGateway | None = None,
    registry: ToolRegistry | None = None,
) -> Starlette:
    """Build the Starlette app.

    Args:
        settings: Defaults to ``get_settings()``
        gateway: Backend gateway; an ``HttpGateway`` over the configured base URL when omitted
        registry: Pre-built registry; the default tool set over ``gateway`` when omitted
    """
    settings = settings or get_settings()
    if registry is None:
        gateway = gateway or HttpGateway(settings.backend)
        registry = create_registry(gateway, settings)
    manager = StreamableHTTPSessionManager(
        app=build_server(registry, settings.server),
        stateless=True,
        json_response=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with manager.run():
            yield
        if isinstance(registry.gateway, HttpGateway):
            await registry.gateway.aclose()

    app = Starlette(routes=[Route(settings.server.path, McpEndpoint(manager))], lifespan=lifespan)
    app.state.registry = registry
    app.state.settings = settings
    return app


def main() -> None:
    """Console entry point: configure logging from settings and serve."""
    settings = get_settings()
    configure_logging(settings.logging.format, settings.logging.level)
    app = create_app(settings)
    log.info(
        "server starting",
        host=settings.server.host,
        port=settings.server.port,
        path=settings.server.path,
        backend=settings.backend.base_url,
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_level=settings.logging.level.lower())
