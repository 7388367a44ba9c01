"""Product catalog lookup by SKU."""

from __future__ import annotations

from wismo.envelope import FAILURE_POLICIES
from wismo.foundation.core import BaseTool, RenderMode, ToolMetadata
from wismo.foundation.errors import JsonValue

from .params import ProductParams


class GetProductsTool(BaseTool[ProductParams]):
    """POSTs the SKU list and returns the catalog rows as indented JSON text."""

    metadata = ToolMetadata(
        name="get-products",
        description="Get product information by SKU numbers",
        category="catalog",
    )
    params_schema = ProductParams
    method = "POST"
    render_mode = RenderMode.PRETTY
    policy = FAILURE_POLICIES["get-products"]

    def route(self, params: ProductParams) -> str:
        return "product_descriptions/"

    def body(self, params: ProductParams) -> JsonValue:
        return {"skus": list(params.skus)}
