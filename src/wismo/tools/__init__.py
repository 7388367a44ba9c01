"""The tools exposed by the server.

Quick Start:
    >>> registry = ToolRegistry(gateway)
    >>> registry.register_all(default_tools())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .orders import GetOrderEmailTool, GetOrderInfoTool, GetOrderOverviewTool, OrderLookupTool
from .params import OrderNumberParams, ProductParams
from .products import GetProductsTool

if TYPE_CHECKING:
    from pydantic import BaseModel

    from wismo.foundation.config import SchemaSettings
    from wismo.foundation.core import BaseTool


def default_tools(settings: SchemaSettings | None = None) -> list[BaseTool[BaseModel]]:
    """One instance of every tool, in advertising order."""
    return [
        GetOrderInfoTool(settings),
        GetOrderOverviewTool(settings),
        GetOrderEmailTool(settings),
        GetProductsTool(settings),
    ]


__all__ = [
    "GetOrderEmailTool", "GetOrderInfoTool", "GetOrderOverviewTool", "GetProductsTool",
    "OrderLookupTool", "OrderNumberParams", "ProductParams", "default_tools",
]
