"""Tests for the result envelope and the per-tool failure policy table."""

from __future__ import annotations

import pytest
from mcp.types import CallToolResult

from wismo.envelope import (
    FAILURE_POLICIES,
    ToolEnvelope,
    as_list,
    error_envelope,
    rejection_envelope,
    structured_envelope,
    text_envelope,
)
from wismo.foundation.errors import ErrorCode, ToolError
from wismo.gateway import BackendFailure, FailureKind


# ═════════════════════════════════════════════════════════════════════════════
# Envelope Shape
# ═════════════════════════════════════════════════════════════════════════════


def test_single_object_is_wrapped_in_a_list() -> None:
    envelope = structured_envelope({"orderNumber": 1})
    assert envelope.structured_content == [{"orderNumber": 1}]
    assert envelope.content == []
    assert not envelope.is_error


def test_list_payload_is_kept_as_is() -> None:
    payload = [{"orderNumber": 1}, {"orderNumber": 2}]
    assert as_list(payload) is payload
    assert structured_envelope(payload).structured_content == payload


def test_call_result_carries_list_structured_content() -> None:
    result = structured_envelope([{"orderNumber": 1}]).to_result()

    assert isinstance(result, CallToolResult)
    assert result.content == []
    assert result.structuredContent == [{"orderNumber": 1}]
    assert result.isError is False


def test_call_result_of_text_envelopes() -> None:
    ok = text_envelope("hello").to_result()
    failed = error_envelope("boom").to_result()

    assert [block.text for block in ok.content] == ["hello"]
    assert ok.structuredContent is None
    assert not ok.isError
    assert failed.content[0].type == "text"
    assert failed.isError


def test_envelope_accepts_wire_aliases() -> None:
    envelope = ToolEnvelope.model_validate({"content": [{"type": "text", "text": "a"}], "isError": True})
    assert envelope.is_error
    assert envelope.text == "a"


def test_rejection_is_flagged_and_not_serialized() -> None:
    error = ToolError.create("nope", "Tool 'nope' not found", ErrorCode.UNKNOWN_TOOL)
    envelope = rejection_envelope(error)

    assert envelope.is_rejection
    assert envelope.is_error
    assert "rejection" not in envelope.model_dump(by_alias=True)
    assert envelope.to_result().content[0].text == "Tool 'nope' not found"
    assert not text_envelope("x", is_error=True).is_rejection


# ═════════════════════════════════════════════════════════════════════════════
# Failure Policy
# ═════════════════════════════════════════════════════════════════════════════


NOT_FOUND = BackendFailure.from_status(404, "Not Found")
SERVER_ERROR = BackendFailure.from_status(500, "Internal Server Error")
REFUSED = BackendFailure(kind=FailureKind.TRANSPORT, code=ErrorCode.NETWORK_ERROR, message="Connection refused")


def test_every_tool_has_a_policy() -> None:
    assert set(FAILURE_POLICIES) == {"get-order-info", "get-order-overview", "get-order-email", "get-products"}


@pytest.mark.parametrize(
    ("tool", "flagged"),
    [("get-order-info", True), ("get-order-overview", False), ("get-order-email", False), ("get-products", False)],
)
def test_only_order_info_flags_failures(tool: str, flagged: bool) -> None:
    policy = FAILURE_POLICIES[tool]
    for failure in (NOT_FOUND, SERVER_ERROR, REFUSED):
        assert policy.render(failure, "99999").is_error is flagged


@pytest.mark.parametrize(
    ("tool", "failure", "text"),
    [
        ("get-order-info", NOT_FOUND, "Order 99999 not found."),
        ("get-order-info", SERVER_ERROR, "Error fetching order 99999: 500 Internal Server Error"),
        ("get-order-info", REFUSED, "Failed to fetch order information: Connection refused"),
        ("get-order-overview", NOT_FOUND, "Order overview for 99999 not found."),
        ("get-order-overview", SERVER_ERROR, "Error fetching order overview 99999: 500 Internal Server Error"),
        ("get-order-overview", REFUSED, "Failed to fetch order overview: Connection refused"),
        ("get-order-email", NOT_FOUND, "Order 99999 not found."),
        ("get-order-email", SERVER_ERROR, "Error fetching order email 99999: 500 Internal Server Error"),
        ("get-order-email", REFUSED, "Failed to fetch order email: Connection refused"),
        ("get-products", NOT_FOUND, "Error fetching products: 404 Not Found"),
        ("get-products", REFUSED, "Failed to fetch product information: Connection refused"),
    ],
)
def test_failure_text(tool: str, failure: BackendFailure, text: str) -> None:
    assert FAILURE_POLICIES[tool].render(failure, "99999").text == text
