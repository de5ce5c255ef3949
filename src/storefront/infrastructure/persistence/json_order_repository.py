"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConcurrentTransition, OrderNotFound
from storefront.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import (
    OrderPredicate,
    OrderRepository,
)
from storefront.infrastructure.persistence.json_file import (
    ensure_json_file,
    file_lock,
    read_json,
    write_json_atomic,
)


class JsonOrderRepository(OrderRepository):
    """Every read-modify-write holds the file lock, so IDs, order numbers
    and status compare-and-set stay safe across threads and processes."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> Order:
        with file_lock(self._file_path):
            orders = self._load_raw()
            order.id = max((o["id"] for o in orders), default=0) + 1
            order.order_number = format_order_number(order.id, order.created_at)
            orders.append(self._to_raw(order))
            self._persist_raw(orders)
        return order

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by(self, predicate: OrderPredicate) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._load_raw()]
        matching = [order for order in orders if predicate(order)]
        return sorted(matching, key=lambda o: (o.created_at, o.id), reverse=True)

    def update_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        expected_status: OrderStatus,
    ) -> Order:
        with file_lock(self._file_path):
            orders = self._load_raw()
            for i, raw in enumerate(orders):
                if raw["id"] != order_id:
                    continue
                current = self._to_domain(raw)
                if current.status != expected_status:
                    raise ConcurrentTransition(
                        f"Order #{order_id} is now {current.status.value}, "
                        f"not {expected_status.value}"
                    )
                updated = current.with_status(new_status)
                orders[i] = self._to_raw(updated)
                self._persist_raw(orders)
                return updated
        raise OrderNotFound(f"Order #{order_id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "delivery_address": order.delivery_address,
            "payment_method": order.payment_method.value,
            "payment_reference": order.payment_reference,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat() if order.updated_at else None,
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i["currency"]),
            )
            for i in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw["customer_id"],
            lines=lines,
            delivery_address=raw["delivery_address"],
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_reference=raw.get("payment_reference"),
            total=Money(Decimal(raw["total"]), raw["currency"]),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=(
                datetime.fromisoformat(raw["updated_at"]) if raw.get("updated_at") else None
            ),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return read_json(self._file_path)

    def _persist_raw(self, orders: list[dict]) -> None:
        write_json_atomic(self._file_path, orders)

    def _ensure_file(self) -> None:
        ensure_json_file(self._file_path, [])


def format_order_number(order_id: int, created_at: datetime | None = None) -> str:
    """Human-readable order number, unique because the ID is."""
    created_at = created_at or datetime.now(timezone.utc)
    return f"ORD-{created_at:%Y%m%d}-{order_id:05d}"
