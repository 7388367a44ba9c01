"""Fake backend gateway for tests.

Provides FakeGateway, an in-memory BackendGateway that:
- Answers (method, path) routes with canned payloads or failures
- Raises configured exceptions to simulate transport faults
- Records invocations for verification
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from wismo.foundation.errors import Err, JsonValue, Ok
from wismo.gateway import BackendFailure

if TYPE_CHECKING:
    from wismo.gateway import BackendResult, HttpMethod

Reply: TypeAlias = "JsonValue | BackendFailure | Exception"


@dataclass(slots=True)
class Invocation:
    """Record of a single backend request."""
    method: str
    path: str
    body: JsonValue = None


@dataclass
class FakeGateway:
    """Backend double keyed by (method, path).

    Unrouted requests answer 404 Not Found, like the real backend does for
    an unknown order.

    Example:
        >>> gateway = FakeGateway().route("GET", "order_detail/12345", [order])
        >>> gateway.fail("GET", "order_detail/99999", status=404)
        >>> gateway.raise_on("GET", "email/1", ConnectionRefusedError("Connection refused"))
    """
    routes: dict[tuple[str, str], Reply] = field(default_factory=dict)
    invocations: list[Invocation] = field(default_factory=list)

    def route(self, method: HttpMethod, path: str, reply: Reply) -> FakeGateway:
        self.routes[(method, path)] = reply
        return self

    def fail(self, method: HttpMethod, path: str, *, status: int, reason: str = "Not Found") -> FakeGateway:
        return self.route(method, path, BackendFailure.from_status(status, reason))

    def raise_on(self, method: HttpMethod, path: str, exc: Exception) -> FakeGateway:
        return self.route(method, path, exc)

    async def request(self, method: HttpMethod, path: str, body: JsonValue = None) -> BackendResult:
        self.invocations.append(Invocation(method, path, body))
        reply = self.routes.get((method, path), BackendFailure.from_status(404, "Not Found"))
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, BackendFailure):
            return Err(reply)
        return Ok(reply)

    @property
    def call_count(self) -> int:
        return len(self.invocations)

    @property
    def called(self) -> bool:
        return self.call_count > 0

    @property
    def last_call(self) -> Invocation | None:
        return self.invocations[-1] if self.invocations else None

    def assert_called(self) -> None:
        if not self.called:
            raise AssertionError("Expected backend to be called")

    def assert_not_called(self) -> None:
        if self.called:
            raise AssertionError(f"Backend called {self.call_count} times")

    def assert_called_with(self, method: str, path: str, body: JsonValue = None) -> None:
        last = self.last_call
        if last is None:
            raise AssertionError("Expected backend to be called")
        if (last.method, last.path, last.body) != (method, path, body):
            raise AssertionError(f"Expected {method} {path} {body!r}, got {last.method} {last.path} {last.body!r}")

    def reset(self) -> None:
        self.invocations.clear()
