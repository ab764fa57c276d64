"""Pydantic models for the records exchanged with the storefront backend."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LINE_COLOR = "Estándar"


class User(BaseModel):
    """Authenticated shop customer or administrator."""

    model_config = ConfigDict(extra="ignore")

    id: int
    username: str
    nombre: str = ""
    email: str = ""
    direccion: str = ""
    ciudad: str = ""
    cp: str = ""
    role: str = "user"
    token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Category(BaseModel):
    """Product category."""

    model_config = ConfigDict(extra="ignore")

    id: int
    nombre: str = ""
    descripcion: str | None = None


class Product(BaseModel):
    """Catalogue product as returned by ``/productos``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    nombre: str | None = None
    descripcion: str | None = None
    precio: float | None = None
    stock: int | None = None
    imagen: str | None = None
    idcategoria: int | None = None


class OrderStatus(str, Enum):
    """Order lifecycle states reported by the backend."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    OrderStatus.PENDING: "Pendiente",
    OrderStatus.PROCESSING: "Procesando",
    OrderStatus.SHIPPED: "Enviado",
    OrderStatus.DELIVERED: "Entregado",
    OrderStatus.CANCELLED: "Cancelado",
    OrderStatus.REFUNDED: "Reembolsado",
}


def status_label(status: str) -> str:
    """Return the Spanish label for ``status`` or the raw value if unknown."""

    try:
        return OrderStatus(status).label
    except ValueError:
        return status


class OrderLine(BaseModel):
    """Single product line inside an order."""

    model_config = ConfigDict(extra="ignore")

    idprod: int | None = None
    nombre: str = ""
    color: str = DEFAULT_LINE_COLOR
    cantidad: int = 1
    precio: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.precio * self.cantidad


class Order(BaseModel):
    """Order in the client-side shape."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    user_id: int | None = None
    fecha: str | None = None
    total: float = 0.0
    estado: str = OrderStatus.PENDING.value
    lineas: list[OrderLine] = Field(default_factory=list)

    @property
    def status_label(self) -> str:
        return status_label(self.estado)

    @classmethod
    def from_backend(cls, payload: Mapping[str, Any]) -> "Order":
        """Map a backend order record (``iduser``, ``cant``…) to an ``Order``."""

        lines = [
            OrderLine(
                idprod=line.get("idprod"),
                nombre=line.get("nombre") or "",
                color=line.get("color") or DEFAULT_LINE_COLOR,
                cantidad=line.get("cant", line.get("cantidad", 1)),
                precio=line.get("precio") or 0.0,
            )
            for line in payload.get("lineas") or []
        ]
        return cls(
            id=payload.get("id") or payload.get("idpedido"),
            user_id=payload.get("iduser"),
            fecha=payload.get("fecha"),
            total=payload.get("total") or 0.0,
            estado=payload.get("estado") or OrderStatus.PENDING.value,
            lineas=lines,
        )

    def to_backend(self, user_id: int, today: date | None = None) -> dict[str, Any]:
        """Build the payload expected by ``POST /pedidos``."""

        order_date = today or date.today()
        return {
            "iduser": user_id,
            "fecha": order_date.isoformat(),
            "total": self.total,
            "lineas": [
                {
                    "idprod": line.idprod,
                    "color": line.color or DEFAULT_LINE_COLOR,
                    "cant": line.cantidad,
                    "nombre": line.nombre or "",
                }
                for line in self.lineas
            ],
        }


def validate_order(order: Order) -> list[str]:
    """Return human-readable problems that prevent ``order`` from being placed."""

    errors: list[str] = []
    if not order.lineas:
        errors.append("El pedido no tiene productos")
    if order.total <= 0:
        errors.append("El total debe ser mayor que cero")
    for index, line in enumerate(order.lineas, start=1):
        if line.idprod is None:
            errors.append(f"La línea {index} no tiene producto")
        if line.cantidad <= 0:
            errors.append(f"La línea {index} tiene una cantidad inválida")
    return errors
