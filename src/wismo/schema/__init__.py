"""Domain schema for the order hierarchy.

- Order: recursive entity (splitOrders -> Order) with skus and cartons
- Sku / Carton: line items and shipping units pointing back at their order
- Product: catalog metadata keyed by SKU
- validate_order / validate_order_list / validate_products: strict validators
- iter_split_orders / split_depth / payload_depth: depth-bounded traversal
"""

from .models import Carton, DomainModel, Number, Order, Product, ProductRequest, Sku
from .validate import (
    SplitDepthExceeded,
    issues_from,
    iter_split_orders,
    order_json_schema,
    order_list_json_schema,
    payload_depth,
    split_depth,
    validate_order,
    validate_order_list,
    validate_products,
)

__all__ = [
    "Carton", "DomainModel", "Number", "Order", "Product", "ProductRequest", "Sku",
    "validate_order", "validate_order_list", "validate_products", "issues_from",
    "order_json_schema", "order_list_json_schema",
    "iter_split_orders", "split_depth", "payload_depth", "SplitDepthExceeded",
]
