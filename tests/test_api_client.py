"""Tests for the backend HTTP client."""

from __future__ import annotations

import httpx
import pytest
import pytest_mock

from storefront.api.client import StorefrontClient, StorefrontRequestError


@pytest.mark.asyncio
async def test_request_attaches_bearer_token(make_client) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1}])

    client = make_client(handler)
    client.set_token_provider(lambda: "abc123")

    payload = await client.request_json("GET", "/productos")

    assert payload == [{"id": 1}]
    assert seen[0].url.path == "/api/productos"
    assert seen[0].headers["Authorization"] == "Bearer abc123"
    await client.close()


@pytest.mark.asyncio
async def test_request_without_token_sends_no_authorization(make_client) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client = make_client(handler)

    assert await client.request_json("DELETE", "/productos/3") is None
    assert "Authorization" not in seen[0].headers
    await client.close()


@pytest.mark.asyncio
async def test_http_error_carries_status_and_payload(make_client) -> None:
    client = make_client(lambda request: httpx.Response(400, json={"message": "Stock insuficiente"}))

    with pytest.raises(StorefrontRequestError) as exc_info:
        await client.request_json("POST", "/pedidos", json_body={})

    assert exc_info.value.status_code == 400
    assert exc_info.value.backend_message == "Stock insuficiente"
    await client.close()


@pytest.mark.asyncio
async def test_unauthorized_invokes_hook(make_client, mocker: pytest_mock.MockerFixture) -> None:
    hook = mocker.AsyncMock(return_value=None)
    client = make_client(lambda request: httpx.Response(401, json={"message": "expired"}))
    client.set_unauthorized_hook(hook)

    with pytest.raises(StorefrontRequestError) as exc_info:
        await client.request_json("GET", "/users/profile")

    assert exc_info.value.status_code == 401
    hook.assert_awaited_once()
    await client.close()


@pytest.mark.asyncio
async def test_timeout_is_flagged(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    client = make_client(handler)

    with pytest.raises(StorefrontRequestError) as exc_info:
        await client.request_json("GET", "/pedidos/1")

    assert exc_info.value.timed_out
    assert exc_info.value.status_code is None
    await client.close()


@pytest.mark.asyncio
async def test_connection_error_maps_to_status_zero(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)

    with pytest.raises(StorefrontRequestError) as exc_info:
        await client.request_json("GET", "/productos")

    assert exc_info.value.status_code == 0
    await client.close()


@pytest.mark.asyncio
async def test_ping_reports_server_errors(make_client) -> None:
    healthy: StorefrontClient = make_client(lambda request: httpx.Response(200, json=[]))
    broken: StorefrontClient = make_client(lambda request: httpx.Response(503))

    assert await healthy.ping()
    assert not await broken.ping()
    await healthy.close()
    await broken.close()
