"""Wismo - "where is my order" tools over MCP.

Exposes a small set of tools that forward one call each to the
order-management backend and translate the answer, or the failure, into a
uniform result envelope.

Quick Start:
    >>> from wismo import HttpGateway, create_registry, get_settings
    >>>
    >>> settings = get_settings()
    >>> registry = create_registry(HttpGateway(settings.backend), settings)
    >>> envelope = await registry.execute("get-order-info", {"orderNumber": "12345"})
    >>> envelope.structured_content
    [{'orderNumber': 12345, ...}]

Serving:
    $ wismo-mcp                  # or: python -m wismo
    $ PORT=8080 wismo-mcp

Testing Without a Backend:
    >>> from wismo.foundation.testing import FakeGateway
    >>> gateway = FakeGateway().route("GET", "order_detail/12345", order_payload)
    >>> registry = create_registry(gateway)
"""

from __future__ import annotations

__version__ = "1.0.0"

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    Ok,
    Result,
    SchemaValidationError,
    ToolError,
    ValidationIssue,
)

# Config
from .foundation.config import WismoSettings, clear_settings_cache, get_settings

# Domain schema
from .schema import (
    Carton,
    Order,
    Product,
    ProductRequest,
    Sku,
    iter_split_orders,
    split_depth,
    validate_order,
    validate_order_list,
    validate_products,
)

# Envelope
from .envelope import FAILURE_POLICIES, FailurePolicy, TextContent, ToolEnvelope

# Gateway
from .gateway import BackendFailure, BackendGateway, FailureKind, HttpGateway

# Tools and dispatch
from .foundation.core import BaseTool, RenderMode, ToolMetadata
from .foundation.registry import ToolRegistry, create_registry
from .tools import default_tools

# Server
from .server import create_app, main

__all__ = [
    "__version__",
    # Errors
    "Err", "ErrorCode", "Ok", "Result", "SchemaValidationError", "ToolError", "ValidationIssue",
    # Config
    "WismoSettings", "clear_settings_cache", "get_settings",
    # Schema
    "Carton", "Order", "Product", "ProductRequest", "Sku",
    "iter_split_orders", "split_depth", "validate_order", "validate_order_list", "validate_products",
    # Envelope
    "FAILURE_POLICIES", "FailurePolicy", "TextContent", "ToolEnvelope",
    # Gateway
    "BackendFailure", "BackendGateway", "FailureKind", "HttpGateway",
    # Tools
    "BaseTool", "RenderMode", "ToolMetadata", "ToolRegistry", "create_registry", "default_tools",
    # Server
    "create_app", "main",
]
