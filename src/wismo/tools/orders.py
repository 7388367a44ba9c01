"""Order tools: detail, overview and email rendering of one order.

All three call ``GET /<resource>/<orderNumber>`` and differ only in how a
payload is rendered and in the failure policy recorded in
``FAILURE_POLICIES``.
"""

from __future__ import annotations

from typing import ClassVar
from urllib.parse import quote

from wismo.envelope import FAILURE_POLICIES, as_list
from wismo.foundation.core import BaseTool, RenderMode, ToolMetadata
from wismo.foundation.errors import JsonValue
from wismo.schema import SplitDepthExceeded, payload_depth, validate_order_list

from .params import OrderNumberParams


class OrderLookupTool(BaseTool[OrderNumberParams]):
    """Shared shape of the order tools: one GET keyed by order number."""

    params_schema = OrderNumberParams
    method = "GET"
    resource: ClassVar[str]

    def route(self, params: OrderNumberParams) -> str:
        return f"{self.resource}/{quote(params.order_number, safe='')}"

    def identifier(self, params: OrderNumberParams) -> str:
        return params.order_number


class GetOrderInfoTool(OrderLookupTool):
    """Full order detail as structured content.

    Failures carry the error flag. With response validation enabled the
    payload must parse as a list of orders within the split-depth bound,
    otherwise it is reported as a malformed response.
    """

    metadata = ToolMetadata(
        name="get-order-info",
        description="Get detailed order information by order number",
        category="orders",
    )
    resource = "order_detail"
    render_mode = RenderMode.STRUCTURED
    policy = FAILURE_POLICIES["get-order-info"]

    def accept(self, payload: JsonValue) -> JsonValue:
        if self.settings is None or not self.settings.validate_responses:
            return payload
        # Depth is bounded on the raw JSON so validation never descends an unbounded tree
        if payload_depth(payload) > self.settings.max_split_depth:
            raise SplitDepthExceeded(self.settings.max_split_depth)
        validate_order_list(as_list(payload))
        return payload


class GetOrderOverviewTool(OrderLookupTool):
    metadata = ToolMetadata(
        name="get-order-overview",
        description="Get order overview information by order number",
        category="orders",
    )
    resource = "order_overview"
    render_mode = RenderMode.STRUCTURED
    policy = FAILURE_POLICIES["get-order-overview"]


class GetOrderEmailTool(OrderLookupTool):
    """The backend's email rendering of an order, passed through as compact JSON text."""

    metadata = ToolMetadata(
        name="get-order-email",
        description="Get order information formatted as an email by order number",
        category="orders",
    )
    resource = "email"
    render_mode = RenderMode.TEXT
    policy = FAILURE_POLICIES["get-order-email"]
