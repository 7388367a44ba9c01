"""Core tool abstractions: BaseTool, ToolMetadata, RenderMode.

A tool is a declaration: metadata, a parameter schema, the backend route it
calls, how a successful payload is rendered, and the failure policy that
turns a backend failure into an envelope. ``BaseTool.arun`` performs the
single backend call through the injected gateway and never raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

import orjson
from pydantic import BaseModel, ConfigDict, Field

from wismo.envelope import FailurePolicy, ToolEnvelope, structured_envelope, text_envelope
from wismo.foundation.errors import JsonValue
from wismo.gateway import BackendFailure
from wismo.observability import get_logger

if TYPE_CHECKING:
    from wismo.foundation.config import SchemaSettings
    from wismo.gateway import BackendGateway, HttpMethod

log = get_logger("wismo.tools")


class ToolMetadata(BaseModel):
    """Metadata describing a tool to callers.

    Attributes:
        name: Unique identifier (kebab-case, e.g., "get-order-info")
        description: What the tool does (shown to the caller for selection)
        category: Grouping category (e.g., "orders", "catalog")
        enabled: Whether the tool is currently exposed
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_-]*$")
    description: str = Field(..., min_length=10)
    category: str = Field(default="general")
    enabled: bool = Field(default=True)


class RenderMode(StrEnum):
    """How a successful payload reaches the caller."""
    STRUCTURED = "structured"  # list in structured content, no text blocks
    TEXT = "text"  # compact JSON in one text block
    PRETTY = "pretty"  # 2-space indented JSON in one text block


# Type variable for tool parameter schemas
TParams = TypeVar("TParams", bound=BaseModel)


def dump_json(payload: JsonValue, *, pretty: bool = False) -> str:
    """Serialize a payload the way the protocol layer expects to read it back."""
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2 if pretty else 0).decode()


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for all backend-forwarding tools.

    Subclasses must:
    - Define `metadata` with ToolMetadata
    - Define `params_schema` with the Pydantic model type
    - Define `method`, `render_mode` and `policy`
    - Implement `route(params)` returning the backend path

    Optional overrides:
    - `body(params)` for POST payloads
    - `identifier(params)` naming the requested entity in failure messages
    - `accept(payload)` to check a payload before it is rendered

    Example:
        >>> class OrderParams(BaseModel):
        ...     orderNumber: str
        ...
        >>> class OrderTool(BaseTool[OrderParams]):
        ...     metadata = ToolMetadata(name="get-order", description="Fetch one order")
        ...     params_schema = OrderParams
        ...     method = "GET"
        ...     render_mode = RenderMode.STRUCTURED
        ...     policy = FAILURE_POLICIES["get-order-info"]
        ...
        ...     def route(self, params: OrderParams) -> str:
        ...         return f"order_detail/{params.orderNumber}"
    """

    metadata: ClassVar[ToolMetadata]
    params_schema: ClassVar[type[BaseModel]]
    method: ClassVar[HttpMethod] = "GET"
    render_mode: ClassVar[RenderMode] = RenderMode.STRUCTURED
    policy: ClassVar[FailurePolicy]

    def __init__(self, settings: SchemaSettings | None = None) -> None:
        self.settings = settings

    @abstractmethod
    def route(self, params: TParams) -> str:
        """Backend path relative to the gateway's base location."""
        ...

    def body(self, params: TParams) -> JsonValue:
        return None

    def identifier(self, params: TParams) -> str:
        return ""

    def accept(self, payload: JsonValue) -> JsonValue:
        """Hook to check a successful payload; raise ValueError to reject it as malformed."""
        return payload

    # ─────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────

    def render(self, payload: JsonValue) -> ToolEnvelope:
        match self.render_mode:
            case RenderMode.STRUCTURED:
                return structured_envelope(payload)
            case RenderMode.TEXT:
                return text_envelope(dump_json(payload))
            case RenderMode.PRETTY:
                return text_envelope(dump_json(payload, pretty=True))

    def fail(self, failure: BackendFailure, params: TParams) -> ToolEnvelope:
        return self.policy.render(failure, self.identifier(params))

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    async def arun(self, params: TParams, gateway: BackendGateway) -> ToolEnvelope:
        """One backend call, one envelope. Exceptions become transport failures."""
        try:
            result = await gateway.request(self.method, self.route(params), self.body(params))
            return result.match(
                ok=lambda payload: self.render(self.accept(payload)),
                err=lambda failure: self.fail(failure, params),
            )
        except Exception as e:
            log.exception("tool raised", tool=self.metadata.name)
            return self.fail(BackendFailure.from_exception(e), params)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the parameters, as advertised to callers."""
        schema = self.params_schema.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return schema

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.metadata.name,
            "description": self.metadata.description,
            "inputSchema": self.input_schema(),
        }
