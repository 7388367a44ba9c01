"""Tool registry and dispatcher.

The registry holds the closed set of tools, advertises them to callers and
routes invocations by name. Arguments are validated against the tool's
parameter schema before any backend traffic; refusals come back as
rejection envelopes so the protocol layer can tell them apart from backend
failures. ``execute`` never raises.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from wismo.envelope import ToolEnvelope, rejection_envelope
from wismo.foundation.core import BaseTool
from wismo.foundation.errors import ErrorCode, ToolError, format_validation_error
from wismo.observability import get_logger

if TYPE_CHECKING:
    from wismo.foundation.config import WismoSettings
    from wismo.gateway import BackendGateway

log = get_logger("wismo.registry")


class ToolRegistry:
    """Registry of the tools exposed by the server.

    Example:
        >>> registry = ToolRegistry(HttpGateway(settings.backend))
        >>> registry.register(GetOrderInfoTool())
        >>> envelope = await registry.execute("get-order-info", {"orderNumber": "12345"})
    """

    __slots__ = ("_tools", "_gateway")

    def __init__(self, gateway: BackendGateway) -> None:
        self._tools: dict[str, BaseTool[BaseModel]] = {}
        self._gateway = gateway

    @property
    def gateway(self) -> BackendGateway:
        return self._gateway

    def register(self, tool: BaseTool[BaseModel]) -> None:
        """Register a tool instance. Names are unique."""
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered.")
        self._tools[name] = tool

    def register_all(self, tools: Iterable[BaseTool[BaseModel]]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> BaseTool[BaseModel] | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[BaseTool[BaseModel]]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool descriptors (name, description, inputSchema) for enabled tools."""
        return [t.describe() for t in self._tools.values() if t.metadata.enabled]

    # ─────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────

    def _reject(self, name: str, message: str, code: ErrorCode) -> ToolEnvelope:
        return rejection_envelope(ToolError.create(name or "<unnamed>", message, code))

    async def execute(self, name: str, arguments: dict[str, Any] | None = None) -> ToolEnvelope:
        """Validate arguments and run the named tool.

        Unknown names and invalid arguments yield rejection envelopes without
        touching the backend. Everything else is the tool's envelope.
        """
        if (tool := self._tools.get(name)) is None or not tool.metadata.enabled:
            log.warning("unknown tool", tool=name)
            return self._reject(name, f"Tool '{name}' not found", ErrorCode.UNKNOWN_TOOL)

        try:
            params = tool.params_schema.model_validate({} if arguments is None else arguments)
        except ValidationError as e:
            log.warning("invalid parameters", tool=name, errors=e.error_count())
            return self._reject(name, format_validation_error(e, tool_name=name), ErrorCode.INVALID_PARAMS)

        bound = log.bind_tool(name)
        bound.debug("dispatch start")
        start = time.perf_counter()
        envelope = await tool.arun(params, self._gateway)
        bound.info("dispatch finish", is_error=envelope.is_error, duration_ms=round((time.perf_counter() - start) * 1000, 2))
        return envelope


def create_registry(gateway: BackendGateway, settings: WismoSettings | None = None) -> ToolRegistry:
    """Registry populated with the default tool set."""
    from wismo.tools import default_tools

    registry = ToolRegistry(gateway)
    registry.register_all(default_tools(settings.domain if settings else None))
    return registry
