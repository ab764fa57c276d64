"""Order history and checkout operations."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from storefront.api.client import StorefrontClient, StorefrontRequestError
from storefront.models import Order, validate_order
from storefront.services.auth import AuthService

logger = logging.getLogger(__name__)


class OrderServiceError(RuntimeError):
    """Backend failure translated into a message that can be shown to the user."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class OrderValidationError(ValueError):
    """Raised when an order is rejected before being sent."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Pedido inválido: {', '.join(errors)}")


_STATUS_MESSAGES = {
    0: "No se puede conectar al servidor. ¿Está el backend ejecutándose?",
    401: "Tu sesión ha expirado. Por favor, inicia sesión nuevamente.",
    403: "No tienes permisos para realizar esta operación.",
    404: "Recurso no encontrado. El pedido puede que no exista.",
    422: "Error de validación en los datos enviados.",
    500: "Error interno del servidor. Inténtalo más tarde.",
}


def user_message_for(error: StorefrontRequestError) -> str:
    """Pick the user-facing message for a failed backend call."""

    if error.timed_out:
        return "La solicitud tardó demasiado. Intenta nuevamente."
    if error.status_code == 400:
        return error.backend_message or "Datos inválidos enviados al servidor."
    if error.status_code in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[error.status_code]
    return f"Error del servidor: {error.status_code}. {error.backend_message or ''}".strip()


class OrderService:
    """Reads and writes orders of the signed-in user."""

    def __init__(self, client: StorefrontClient, auth: AuthService) -> None:
        self._client = client
        self._auth = auth

    async def _call(self, operation: str, method: str, endpoint: str, **kwargs: Any) -> Any:
        self._auth.require_user()
        try:
            return await self._client.request_json(method, endpoint, **kwargs)
        except StorefrontRequestError as exc:
            message = user_message_for(exc)
            logger.error("Order operation '%s' failed (status=%s): %s", operation, exc.status_code, exc)
            raise OrderServiceError(message, status_code=exc.status_code) from exc

    async def get_user_orders(self) -> list[Order]:
        """Return the orders of the signed-in user."""

        user = self._auth.require_user()
        return await self.get_orders(user.id)

    async def get_orders(self, user_id: int) -> list[Order]:
        payload = await self._call("obtener pedidos", "GET", f"/pedidos/user/{user_id}")
        orders = [Order.from_backend(item) for item in payload or []]
        logger.info("Fetched %d orders for user %s", len(orders), user_id)
        return orders

    async def get_order(self, order_id: int) -> Order:
        payload = await self._call("obtener pedido", "GET", f"/pedidos/{order_id}")
        return Order.from_backend(payload or {})

    async def get_order_by_id(self, order_id: int) -> Order:
        return await self.get_order(order_id)

    async def create_order(self, order: Order, *, today: date | None = None) -> Order:
        """Validate ``order`` and submit it for the signed-in user."""

        user = self._auth.require_user()
        errors = validate_order(order)
        if errors:
            raise OrderValidationError(errors)

        body = order.to_backend(user.id, today)
        payload = await self._call("crear pedido", "POST", "/pedidos", json_body=body)
        return Order.from_backend(payload or {})

    async def cancel_order(self, order_id: int) -> Any:
        return await self._call("cancelar pedido", "PATCH", f"/pedidos/{order_id}/cancel", json_body={})

    async def update_order_status(self, order_id: int, status: str) -> Any:
        return await self._call(
            "actualizar estado del pedido",
            "PATCH",
            f"/pedidos/{order_id}/status",
            json_body={"status": status},
        )

    async def get_orders_summary(self) -> Any:
        return await self._call("obtener resumen de pedidos", "GET", "/pedidos/summary")
