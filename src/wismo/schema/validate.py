"""Validators for backend payloads plus split-order traversal helpers.

Validation errors are reported as ``SchemaValidationError`` carrying one
``ValidationIssue`` per offending field, with a ``splitOrders[0].skus[1].sku``
style path in wire names.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Any

from pydantic import TypeAdapter, ValidationError

from wismo.foundation.errors import SchemaValidationError, ValidationIssue

from .models import Order, Product

# Cached at module level; building an adapter compiles the core schema
_OrderListAdapter: TypeAdapter[list[Order]] = TypeAdapter(list[Order])
_ProductListAdapter: TypeAdapter[list[Product]] = TypeAdapter(list[Product])

# Union member tags pydantic inserts into error locations for `int | float`
_UNION_TAGS = frozenset({"int", "float"})

_EXPECTED: dict[str, str] = {
    "int_type": "number",
    "float_type": "number",
    "int_from_float": "number",
    "string_type": "string",
    "list_type": "array",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
    "extra_forbidden": "no such field",
}


def _json_kind(value: Any) -> str:
    match value:
        case None: return "null"
        case bool(): return "boolean"
        case int() | float(): return "number"
        case str(): return "string"
        case list() | tuple(): return "array"
        case dict(): return "object"
        case _: return type(value).__name__


def _format_path(loc: tuple[int | str, ...]) -> str:
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        elif part not in _UNION_TAGS:
            out += f".{part}" if out else str(part)
    return out


def issues_from(exc: ValidationError) -> list[ValidationIssue]:
    """Collapse pydantic errors into path/expected/actual issues (union branches merged)."""
    seen: dict[tuple[str, str], ValidationIssue] = {}
    for err in exc.errors():
        path = _format_path(err["loc"])
        if err["type"] == "missing":
            issue = ValidationIssue(path=path, expected="required field", actual="missing")
        else:
            issue = ValidationIssue(
                path=path,
                expected=_EXPECTED.get(err["type"], err["msg"]),
                actual=_json_kind(err.get("input")),
            )
        seen.setdefault((issue.path, issue.expected), issue)
    return list(seen.values())


def validate_order(value: Any) -> Order:
    """Validate one Order payload (nested split orders, skus and cartons included)."""
    try:
        return Order.model_validate(value)
    except ValidationError as e:
        raise SchemaValidationError("Order", issues_from(e)) from e


def validate_order_list(value: Any) -> list[Order]:
    """Validate a top-level sequence of Order payloads."""
    try:
        return _OrderListAdapter.validate_python(value)
    except ValidationError as e:
        raise SchemaValidationError("OrderList", issues_from(e)) from e


def validate_products(value: Any) -> list[Product]:
    """Validate the product description lookup payload."""
    try:
        return _ProductListAdapter.validate_python(value)
    except ValidationError as e:
        raise SchemaValidationError("ProductList", issues_from(e)) from e


def order_json_schema() -> dict[str, Any]:
    """JSON Schema of Order in wire names; splitOrders refers back through $ref."""
    return Order.model_json_schema(by_alias=True)


def order_list_json_schema() -> dict[str, Any]:
    return _OrderListAdapter.json_schema(by_alias=True)


# ─────────────────────────────────────────────────────────────────────────────
# Traversal
# ─────────────────────────────────────────────────────────────────────────────


class SplitDepthExceeded(ValueError):
    """Raised when split orders nest deeper than the configured bound."""

    def __init__(self, max_depth: int, order: Order | None = None) -> None:
        self.order = order
        self.max_depth = max_depth
        owner = f"Order {order.order_number}-{order.order_suffix}" if order is not None else "Payload"
        super().__init__(f"{owner} nests split orders deeper than {max_depth} levels")


def iter_split_orders(order: Order, *, max_depth: int = 32) -> Iterator[tuple[int, Order]]:
    """Yield (depth, order) breadth-first, the root at depth 0.

    Iterative, so Python's recursion limit never applies; ``max_depth`` bounds
    producers that hand back an unexpectedly deep (or cyclic) split tree.
    """
    queue: deque[tuple[int, Order]] = deque([(0, order)])
    while queue:
        depth, current = queue.popleft()
        if depth > max_depth:
            raise SplitDepthExceeded(max_depth, order)
        yield depth, current
        queue.extend((depth + 1, child) for child in current.split_orders or ())


def split_depth(order: Order, *, max_depth: int = 32) -> int:
    """Deepest level of splitOrders nesting below ``order`` (0 when never split)."""
    return max(depth for depth, _ in iter_split_orders(order, max_depth=max_depth))


def payload_depth(value: Any) -> int:
    """splitOrders nesting depth of a raw payload, measured before validation."""
    deepest = 0
    stack: list[tuple[int, Any]] = [(0, item) for item in (value if isinstance(value, list) else [value])]
    while stack:
        depth, node = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, dict) and isinstance(children := node.get("splitOrders"), list):
            stack.extend((depth + 1, child) for child in children)
    return deepest
