"""Tests for the MCP streamable-HTTP endpoint using Starlette's TestClient."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import LATEST_PROTOCOL_VERSION
from starlette.testclient import TestClient

from wismo.foundation.config import WismoSettings
from wismo.foundation.registry import ToolRegistry, create_registry
from wismo.foundation.testing import FakeGateway
from wismo.server import create_app

METHOD_NOT_ALLOWED = {"jsonrpc": "2.0", "error": {"code": -32000, "message": "Method not allowed."}, "id": None}
HEADERS = {"Accept": "application/json, text/event-stream"}
CLIENT_INFO = {"capabilities": {}, "clientInfo": {"name": "wismo-tests", "version": "0"}}


def open_client(app: Any) -> TestClient:
    # Entering the client runs the lifespan, which starts the session manager
    return TestClient(app, headers=HEADERS)


@pytest.fixture
def client(gateway: FakeGateway) -> Iterator[TestClient]:
    with open_client(create_app(WismoSettings(), gateway=gateway)) as client:
        yield client


def rpc(client: TestClient, method: str, params: dict[str, Any] | None = None, *, id: int | str = 1) -> dict[str, Any]:  # noqa: A002
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        message["params"] = params
    response = client.post("/mcp", json=message)
    assert response.status_code == 200
    return response.json()


def call(client: TestClient, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    return rpc(client, "tools/call", {"name": name, "arguments": arguments})


# ═════════════════════════════════════════════════════════════════════════════
# Transport
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("verb", ["GET", "DELETE", "PUT", "PATCH", "OPTIONS"])
def test_non_post_verbs_are_refused(client: TestClient, verb: str) -> None:
    response = client.request(verb, "/mcp")
    assert response.status_code == 405
    assert response.json() == METHOD_NOT_ALLOWED


def test_malformed_json_is_a_parse_error(client: TestClient) -> None:
    response = client.post("/mcp", content=b"{not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


def test_non_message_body_is_refused(client: TestClient) -> None:
    response = client.post("/mcp", json=42)
    assert response.status_code == 400
    assert "error" in response.json()


def test_notification_is_accepted_without_body(client: TestClient) -> None:
    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert response.status_code == 202
    assert response.content == b""


def test_request_ids_are_echoed(client: TestClient) -> None:
    assert rpc(client, "ping", id=7)["id"] == 7
    assert rpc(client, "ping", id="abc")["id"] == "abc"
    assert rpc(client, "tools/call", {"name": "get-invoice", "arguments": {}}, id="req-1")["id"] == "req-1"


def test_unexpected_fault_is_internal_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def explode(self: StreamableHTTPSessionManager, scope: Any, receive: Any, send: Any) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(StreamableHTTPSessionManager, "handle_request", explode)
    response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 3, "method": "ping"})

    assert response.status_code == 500
    assert response.json() == {"jsonrpc": "2.0", "error": {"code": -32603, "message": "Internal server error"}, "id": None}


def test_handler_fault_is_answered_not_crashed(gateway: FakeGateway) -> None:
    class BrokenRegistry(ToolRegistry):
        def list_tools(self) -> list[dict[str, Any]]:
            raise RuntimeError("boom")

    with open_client(create_app(WismoSettings(), registry=BrokenRegistry(gateway))) as client:
        body = rpc(client, "tools/list", id=4)

    assert "result" not in body
    assert body["id"] == 4
    assert "error" in body


# ═════════════════════════════════════════════════════════════════════════════
# Lifecycle
# ═════════════════════════════════════════════════════════════════════════════


def test_initialize_echoes_supported_version(client: TestClient) -> None:
    result = rpc(client, "initialize", {"protocolVersion": "2025-03-26", **CLIENT_INFO})["result"]

    assert result["protocolVersion"] == "2025-03-26"
    assert result["serverInfo"]["name"] == "mcp-streamable-http"
    assert result["serverInfo"]["version"] == "1.0.0"
    assert "tools" in result["capabilities"]


def test_initialize_falls_back_to_newest_version(client: TestClient) -> None:
    result = rpc(client, "initialize", {"protocolVersion": "1999-01-01", **CLIENT_INFO})["result"]
    assert result["protocolVersion"] == LATEST_PROTOCOL_VERSION


def test_ping_and_unknown_method(client: TestClient) -> None:
    assert rpc(client, "ping")["result"] == {}
    assert "error" in rpc(client, "resources/templates/unknown")


# ═════════════════════════════════════════════════════════════════════════════
# Tools
# ═════════════════════════════════════════════════════════════════════════════


def test_tools_list(client: TestClient) -> None:
    tools = rpc(client, "tools/list")["result"]["tools"]
    assert [t["name"] for t in tools] == ["get-order-info", "get-order-overview", "get-order-email", "get-products"]
    assert tools[0]["inputSchema"]["required"] == ["orderNumber"]


def test_call_success_returns_structured_content(client: TestClient, gateway: FakeGateway, make_order) -> None:
    order = make_order()
    gateway.route("GET", "order_detail/12345", order)

    result = call(client, "get-order-info", {"orderNumber": "12345"})["result"]

    assert result["content"] == []
    assert result["structuredContent"] == [order]
    assert result.get("isError", False) is False


def test_call_failures_keep_their_error_flag(client: TestClient) -> None:
    info = call(client, "get-order-info", {"orderNumber": "99999"})["result"]
    overview = call(client, "get-order-overview", {"orderNumber": "99999"})["result"]

    assert info["content"] == [{"type": "text", "text": "Order 99999 not found."}]
    assert info["isError"] is True
    assert overview["content"] == [{"type": "text", "text": "Order overview for 99999 not found."}]
    assert overview.get("isError", False) is False
    assert "structuredContent" not in overview


def test_unknown_tool_is_an_rpc_error(client: TestClient, gateway: FakeGateway) -> None:
    body = rpc(client, "tools/call", {"name": "get-invoice", "arguments": {}}, id=9)

    assert "result" not in body
    assert body["id"] == 9
    assert body["error"]["code"] == -32602
    assert body["error"]["data"] == {"code": "UNKNOWN_TOOL", "tool": "get-invoice"}
    gateway.assert_not_called()


def test_invalid_arguments_are_an_rpc_error(client: TestClient, gateway: FakeGateway) -> None:
    products = call(client, "get-products", {"skus": "A1"})
    snake_case = call(client, "get-order-info", {"order_number": "1"})

    assert products["error"]["code"] == -32602
    assert products["error"]["data"]["code"] == "INVALID_PARAMS"
    assert snake_case["error"]["data"] == {"code": "INVALID_PARAMS", "tool": "get-order-info"}
    gateway.assert_not_called()


def test_call_without_name_is_refused(client: TestClient, gateway: FakeGateway) -> None:
    body = rpc(client, "tools/call", {"arguments": {}})
    assert "error" in body
    gateway.assert_not_called()


def test_custom_endpoint_path(monkeypatch: pytest.MonkeyPatch, gateway: FakeGateway) -> None:
    monkeypatch.setenv("WISMO_SERVER_PATH", "/rpc")
    with open_client(create_app(WismoSettings(), registry=create_registry(gateway))) as client:
        response = client.post("/rpc", json={"jsonrpc": "2.0", "id": 1, "method": "ping"})
    assert response.json()["result"] == {}
