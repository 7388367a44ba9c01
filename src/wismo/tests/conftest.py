"""Shared fixtures: quiet logging, fresh settings, a fake backend and order payloads."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from wismo.foundation.config import clear_settings_cache
from wismo.foundation.registry import ToolRegistry, create_registry
from wismo.foundation.testing import FakeGateway
from wismo.observability import configure_logging

OrderFactory = Callable[..., dict[str, Any]]


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    configure_logging("none")


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def registry(gateway: FakeGateway) -> ToolRegistry:
    return create_registry(gateway)


@pytest.fixture
def make_order() -> OrderFactory:
    """Build a wire-shaped Order payload; ``depth`` nests that many split levels below it."""

    def build(number: int = 12345, suffix: int = 0, *, depth: int = 0, **overrides: Any) -> dict[str, Any]:
        order: dict[str, Any] = {
            "orderNumber": number,
            "orderBookedDate": "2024-03-01",
            "orderSuffix": suffix,
            "orderStatus": "Shipped",
            "orderContactFullName": "Dana Reyes",
            "contactEmailAddress": "dana@example.com",
            "contactPhone": 5551234567,
            "shipTo": 42,
            "shipToName": "Main Street Clinic",
            "skus": [{"orderNumber": number, "orderSuffix": suffix, "sku": f"SKU-{suffix}", "pickQty": 2}],
            "cartons": [{
                "orderNumber": number,
                "orderSuffix": suffix,
                "cartonId": 900 + suffix,
                "deliveryStatusDescription": "In transit",
                "expectedDeliveryDate": "2024-03-05",
                "actualDeliveryDate": None,
                "carrierCode": "UPS",
                "carrierDescription": "United Parcel Service",
                "traceAndTraceLink": "https://track.example.com/1Z999",
                "skus": [{"orderNumber": number, "orderSuffix": suffix, "sku": f"SKU-{suffix}"}],
            }],
        }
        if depth > 0:
            order["splitOrders"] = [build(number, suffix + 1, depth=depth - 1)]
        order.update(overrides)
        return order

    return build
