"""Per-tool failure policy.

Tools deliberately disagree on how a failed backend call is reported:
``get-order-info`` marks failures with the error flag, the others report
the same information as plain text. The table below is the single place
that records this, so the difference stays visible and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .envelope import ToolEnvelope, error_envelope, text_envelope

if TYPE_CHECKING:
    from wismo.gateway import BackendFailure


class FailurePolicy(BaseModel):
    """How one tool turns a backend failure into an envelope.

    Templates are ``str.format`` strings with the fields ``id`` (the
    requested identifier), ``status``, ``reason`` and ``message``. A
    ``not_found`` of None means 404 is reported like any other HTTP error.
    """

    model_config = ConfigDict(frozen=True)

    flag_errors: bool
    not_found: str | None
    http_error: str
    transport_error: str

    def render(self, failure: BackendFailure, identifier: str = "") -> ToolEnvelope:
        fields = {"id": identifier, "status": failure.status, "reason": failure.reason, "message": failure.message}
        if failure.is_not_found and self.not_found is not None:
            template = self.not_found
        elif failure.is_http:
            template = self.http_error
        else:
            template = self.transport_error
        text = template.format(**fields)
        return error_envelope(text) if self.flag_errors else text_envelope(text)


FAILURE_POLICIES: dict[str, FailurePolicy] = {
    "get-order-info": FailurePolicy(
        flag_errors=True,
        not_found="Order {id} not found.",
        http_error="Error fetching order {id}: {status} {reason}",
        transport_error="Failed to fetch order information: {message}",
    ),
    "get-order-overview": FailurePolicy(
        flag_errors=False,
        not_found="Order overview for {id} not found.",
        http_error="Error fetching order overview {id}: {status} {reason}",
        transport_error="Failed to fetch order overview: {message}",
    ),
    "get-order-email": FailurePolicy(
        flag_errors=False,
        not_found="Order {id} not found.",
        http_error="Error fetching order email {id}: {status} {reason}",
        transport_error="Failed to fetch order email: {message}",
    ),
    "get-products": FailurePolicy(
        flag_errors=False,
        not_found=None,
        http_error="Error fetching products: {status} {reason}",
        transport_error="Failed to fetch product information: {message}",
    ),
}
