"""Parameter schemas for the order and product tools."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wismo.schema import ProductRequest


class OrderNumberParams(BaseModel):
    """Lookup of one order by its order number."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        alias_generator=to_camel,
    )

    order_number: Annotated[str, Field(description="The order number to look up")]


# The product lookup body doubles as the tool's parameter schema
ProductParams = ProductRequest

__all__ = ["OrderNumberParams", "ProductParams"]
