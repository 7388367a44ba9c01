"""Order hierarchy models: Order, Sku, Carton, Product.

All models are immutable values built fresh from one backend response.
Wire names are camelCase; Python attributes are snake_case. Validation is
strict: numbers stay numbers and strings stay strings, nothing is coerced.

``Order.split_orders`` refers to ``Order`` itself. The annotation is a
forward reference resolved by ``Order.model_rebuild()`` once the class
exists, so the self-reference is settled at validation time instead of
class-construction time.
"""

from __future__ import annotations

from typing import Annotated, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# JSON numbers: integers and floats are both accepted, booleans are not
Number: TypeAlias = int | float

OrderStatus: TypeAlias = str
DeliveryStatus: TypeAlias = str


class DomainModel(BaseModel):
    """Shared configuration for backend payload models."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        revalidate_instances="never",
    )


class Sku(DomainModel):
    """A single line item. (order_number, order_suffix) points back at the owning Order."""

    order_number: Number = Field(description="The order number")
    order_suffix: Number = Field(description="The order suffix")
    sku: str | None = Field(default=None, description="The SKU identifier")
    pick_qty: Number | None = Field(default=None, description="quantity of sku")


class Carton(DomainModel):
    """A physical shipping unit and its delivery tracking metadata."""

    order_number: Number = Field(description="The order number")
    order_suffix: Number = Field(description="The order suffix")
    carton_id: Number | None = Field(default=None, description="The carton identifier")
    delivery_status_description: DeliveryStatus | None = Field(
        default=None, description="Delivery status description"
    )
    expected_delivery_date: str | None = Field(
        default=None, description="the expected date of delivery (ISO format)"
    )
    actual_delivery_date: str | None = Field(
        default=None,
        description="date it was delivered, null means that it has not been delivered yet (ISO format)",
    )
    carrier_code: str | None = Field(default=None, description="Carrier code")
    carrier_description: str | None = Field(default=None, description="name of the carrier")
    trace_and_trace_link: str | None = Field(default=None, description="This is the link to track the package")
    skus: list[Sku] = Field(description="This is a list of the skus in the order")

    @property
    def is_delivered(self) -> bool:
        return self.actual_delivery_date is not None


class Order(DomainModel):
    """A customer order at one back-order (suffix) level.

    ``skus`` and ``cartons`` hold only what was fulfilled at this suffix;
    items moved to a higher suffix live under that suffix's own Order in
    ``split_orders``.
    """

    order_number: Number = Field(description="The main order number")
    order_booked_date: str = Field(description="The date the order was booked (ISO format)")
    order_suffix: Number = Field(
        description=(
            "this is the backorder level, a order number might have multiple backorder levels "
            "this is when we have some of the items in stock and some not so the ones that are "
            "not in stock are moved to a higher back order level to be delivered later"
        )
    )
    order_status: OrderStatus = Field(description="Status of the order")
    order_contact_full_name: str = Field(description="Full name of the order contact")
    contact_email_address: str = Field(description="Email address of the contact")
    contact_phone: Number = Field(description="Phone number of the contact")
    ship_to: Number = Field(description="Ship to identifier")
    ship_to_name: str = Field(description="Ship to name")
    split_orders: list[Order] | None = Field(
        default=None,
        description=(
            "This is the list of all the orders that this order has been split into. When an order "
            "splits into other orders it is commonly because we don't have it and it is being "
            "fulfilled by someone else. Some of the items go to the split order and some remain "
            "in the original"
        ),
    )
    skus: list[Sku] | None = Field(
        default=None, description="this is the skus associated with this order, not including its split orders"
    )
    cartons: list[Carton] | None = Field(
        default=None,
        description=(
            "this is the cartons associated with this order, cartons are the units that we deliver "
            "in, each carton is delivered as a separate entity"
        ),
    )

    @property
    def key(self) -> tuple[Number, Number]:
        """(order_number, order_suffix), the composite key Sku and Carton point back to."""
        return (self.order_number, self.order_suffix)


# Resolve the splitOrders self-reference now that Order exists
Order.model_rebuild()


class Product(DomainModel):
    """Catalog metadata keyed by SKU."""

    sku: str = Field(description="The SKU identifier")
    hfa_description: str = Field(description="HFA description")
    manufacturer_name: str = Field(description="Manufacturer name")


class ProductRequest(DomainModel):
    """Body of the product description lookup; also the tool's arguments, so wire names only."""

    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    skus: Annotated[list[str], Field(description="Array of SKU numbers to look up")]
