"""Outbound calls to the order-management backend.

One call per tool invocation against a fixed base location. The gateway
returns ``Ok(payload)`` with the decoded JSON, or ``Err(BackendFailure)``
classified as an HTTP status failure or a transport failure. It never
retries, caches or reshapes the payload; interpretation belongs to the
calling tool.

Example:
    >>> gateway = HttpGateway(get_settings().backend)
    >>> result = await gateway.request("GET", "order_detail/12345")
    >>> result.match(ok=len, err=lambda f: f.message)
"""

from __future__ import annotations

import time
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, computed_field

from wismo.foundation.errors import Err, ErrorCode, JsonValue, Ok, Result, classify_exception
from wismo.observability import get_logger

if TYPE_CHECKING:
    from wismo.foundation.config import BackendSettings

HttpMethod = Literal["GET", "POST"]

log = get_logger("wismo.gateway")


class FailureKind(StrEnum):
    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"


class BackendFailure(BaseModel):
    """Why a backend call produced no usable payload."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    code: ErrorCode
    message: str
    status: int | None = None
    reason: str = ""

    @computed_field
    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_http(self) -> bool:
        return self.kind is FailureKind.HTTP_STATUS

    @classmethod
    def from_status(cls, status: int, reason: str) -> BackendFailure:
        return cls(
            kind=FailureKind.HTTP_STATUS,
            code=ErrorCode.NOT_FOUND if status == 404 else ErrorCode.EXTERNAL_SERVICE_ERROR,
            message=f"{status} {reason}".strip(),
            status=status,
            reason=reason,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> BackendFailure:
        code = ErrorCode.TIMEOUT if isinstance(exc, httpx.TimeoutException) else classify_exception(exc)
        return cls(kind=FailureKind.TRANSPORT, code=code, message=str(exc) or type(exc).__name__)


BackendResult = Result[JsonValue, BackendFailure]


@runtime_checkable
class BackendGateway(Protocol):
    """Capability handed to tools for their single backend call."""

    async def request(self, method: HttpMethod, path: str, body: JsonValue = None) -> BackendResult: ...


class HttpGateway:
    """httpx-backed gateway with one pooled async client.

    Requests declare ``Accept: application/json``; POSTs additionally send a
    JSON body with ``Content-Type: application/json``.
    """

    __slots__ = ("_settings", "_client", "_transport")

    def __init__(self, settings: BackendSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                headers={"Accept": "application/json", "User-Agent": self._settings.user_agent},
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, method: HttpMethod, path: str, body: JsonValue = None) -> BackendResult:
        headers: dict[str, str] = {}
        content: bytes | None = None
        if method == "POST":
            content = orjson.dumps(body)
            headers["Content-Type"] = "application/json"

        start = time.perf_counter()
        try:
            response = await self._get_client().request(method, path.lstrip("/"), content=content, headers=headers)
        except httpx.HTTPError as e:
            return self._fail(BackendFailure.from_exception(e), method, path)

        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        if not response.is_success:
            log.warning("backend status", method=method, path=path, status=response.status_code, duration_ms=elapsed_ms)
            return Err(BackendFailure.from_status(response.status_code, response.reason_phrase))

        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            return self._fail(
                BackendFailure(kind=FailureKind.TRANSPORT, code=ErrorCode.PARSE_ERROR, message=f"Invalid JSON response: {e}"),
                method, path,
            )

        log.info("backend call", method=method, path=path, status=response.status_code, duration_ms=elapsed_ms)
        return Ok(payload)

    @staticmethod
    def _fail(failure: BackendFailure, method: str, path: str) -> BackendResult:
        log.error("backend failure", method=method, path=path, kind=failure.kind.value, code=failure.code.value,
                  message=failure.message)
        return Err(failure)
