"""Tests for the order service."""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from storefront.models import Order, OrderLine
from storefront.services.auth import AuthenticationRequiredError, AuthService
from storefront.services.orders import OrderService, OrderServiceError, OrderValidationError


async def _signed_in(make_client, session_store, user_payload, handler) -> tuple[AuthService, OrderService]:
    def routed(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/users/login":
            return httpx.Response(200, json={"user": user_payload()})
        return handler(request)

    client = make_client(routed)
    auth = AuthService(client, session_store)
    await auth.login("lucia", "secreto")
    return auth, OrderService(client, auth)


@pytest.mark.asyncio
async def test_orders_need_authentication(make_client, session_store) -> None:
    client = make_client(lambda request: httpx.Response(200, json=[]))
    orders = OrderService(client, AuthService(client, session_store))

    with pytest.raises(AuthenticationRequiredError):
        await orders.get_user_orders()
    with pytest.raises(AuthenticationRequiredError):
        await orders.get_orders_summary()


@pytest.mark.asyncio
async def test_user_orders_are_mapped_from_backend(make_client, session_store, user_payload) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/pedidos/user/7"
        assert request.headers["Authorization"] == "Bearer jwt-token-lucia"
        return httpx.Response(
            200,
            json=[
                {
                    "id": 31,
                    "iduser": 7,
                    "fecha": "2024-05-02",
                    "total": 24.0,
                    "estado": "shipped",
                    "lineas": [{"idprod": 3, "nombre": "Plug doble", "cant": 2, "precio": 12.0}],
                },
            ],
        )

    _, orders = await _signed_in(make_client, session_store, user_payload, handler)

    result = await orders.get_user_orders()

    assert len(result) == 1
    order = result[0]
    assert order.user_id == 7
    assert order.status_label == "Enviado"
    assert order.lineas[0].cantidad == 2
    assert order.lineas[0].color == "Estándar"
    assert order.lineas[0].subtotal == pytest.approx(24.0)


@pytest.mark.asyncio
async def test_create_order_posts_backend_payload(make_client, session_store, user_payload) -> None:
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert (request.method, request.url.path) == ("POST", "/api/pedidos")
        body = json.loads(request.content)
        sent.append(body)
        return httpx.Response(201, json={"id": 40, **body})

    _, orders = await _signed_in(make_client, session_store, user_payload, handler)
    order = Order(
        total=30.0,
        lineas=[
            OrderLine(idprod=3, nombre="Túnel metal", color="cobre", cantidad=1, precio=10.0),
            OrderLine(idprod=8, nombre="Labret simple", color="", cantidad=2, precio=10.0),
        ],
    )

    created = await orders.create_order(order, today=date(2024, 6, 1))

    assert sent[0] == {
        "iduser": 7,
        "fecha": "2024-06-01",
        "total": 30.0,
        "lineas": [
            {"idprod": 3, "color": "cobre", "cant": 1, "nombre": "Túnel metal"},
            {"idprod": 8, "color": "Estándar", "cant": 2, "nombre": "Labret simple"},
        ],
    }
    assert created.id == 40


@pytest.mark.asyncio
async def test_invalid_order_is_not_sent(make_client, session_store, user_payload) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("backend must not be called")

    _, orders = await _signed_in(make_client, session_store, user_payload, handler)

    with pytest.raises(OrderValidationError) as exc_info:
        await orders.create_order(Order(total=0.0))

    assert "El pedido no tiene productos" in exc_info.value.errors


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "body", "expected"),
    [
        (400, {"message": "Stock insuficiente"}, "Stock insuficiente"),
        (403, {}, "No tienes permisos"),
        (404, {}, "Recurso no encontrado"),
        (500, {}, "Error interno del servidor"),
        (418, {"message": "tetera"}, "Error del servidor: 418. tetera"),
    ],
)
async def test_backend_errors_become_user_messages(
    make_client, session_store, user_payload, status, body, expected
) -> None:
    _, orders = await _signed_in(
        make_client,
        session_store,
        user_payload,
        lambda request: httpx.Response(status, json=body),
    )

    with pytest.raises(OrderServiceError, match=expected) as exc_info:
        await orders.cancel_order(31)

    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_expired_session_logs_out(make_client, session_store, user_payload) -> None:
    auth, orders = await _signed_in(
        make_client,
        session_store,
        user_payload,
        lambda request: httpx.Response(401, json={"message": "expired"}),
    )

    with pytest.raises(OrderServiceError, match="Tu sesión ha expirado"):
        await orders.update_order_status(31, "cancelled")

    assert not auth.is_authenticated()
    assert not session_store.path.exists()


@pytest.mark.asyncio
async def test_timeout_message(make_client, session_store, user_payload) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    _, orders = await _signed_in(make_client, session_store, user_payload, handler)

    with pytest.raises(OrderServiceError, match="tardó demasiado"):
        await orders.get_order(31)
