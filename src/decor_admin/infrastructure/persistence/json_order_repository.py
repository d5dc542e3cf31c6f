"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from decor_admin.domain.model.order import (
    CustomerInfo,
    Order,
    OrderItem,
    PaymentStatus,
    ProductSnapshot,
)
from decor_admin.domain.model.order_status import OrderStatus
from decor_admin.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from decor_admin.domain.repository.order_repository import OrderRepository
from decor_admin.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.load()]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def save(self, order: Order) -> None:
        with self._file.lock:
            if order.id is None:
                order.id = self.next_id()

            orders = self._file.load()
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))
            self._file.persist(orders)

    def delete(self, order_id: int) -> None:
        with self._file.lock:
            orders = self._file.load()
            remaining = [raw for raw in orders if raw["id"] != order_id]
            if len(remaining) != len(orders):
                self._file.persist(remaining)

    def update(self, order_id: int, change: Callable[[Order], bool]) -> bool:
        with self._file.lock:
            orders = self._file.load()
            for i, raw in enumerate(orders):
                if raw["id"] != order_id:
                    continue
                order = self._to_domain(raw)
                if not change(order):
                    return False
                orders[i] = self._to_raw(order)
                self._file.persist(orders)
                return True
            return False

    def update_status(
        self,
        order_id: int,
        expected: OrderStatus,
        new: OrderStatus,
    ) -> bool:
        def compare_and_set(order: Order) -> bool:
            if order.status != expected:
                return False
            order.change_status(new)
            return True

        return self.update(order_id, compare_and_set)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _money_to_raw(money: Money | None) -> str | None:
        return str(money.amount) if money is not None else None

    @staticmethod
    def _to_raw(order: Order) -> dict:
        money = JsonOrderRepository._money_to_raw
        return {
            "id": order.id,
            "customer": {
                "name": order.customer.name,
                "email": order.customer.email,
                "phone": order.customer.phone,
                "shipping_address": order.customer.shipping_address,
                "city": order.customer.city,
            },
            "status": order.status.value,
            "currency": order.total.currency,
            "subtotal": money(order.subtotal),
            "delivery_fee": money(order.delivery_fee),
            "total_amount": money(order.total_amount),
            "payment_method": order.payment_method,
            "payment_status": order.payment_status.value,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "title": item.title,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "snapshot": (
                        {
                            "title": item.snapshot.title,
                            "price": str(item.snapshot.price.amount),
                            "sku": item.snapshot.sku,
                            "category": item.snapshot.category,
                        }
                        if item.snapshot is not None
                        else None
                    ),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)

        def money(value) -> Money | None:
            return Money(Decimal(str(value)), currency) if value is not None else None

        items = []
        for i in raw["items"]:
            snap = i.get("snapshot")
            items.append(
                OrderItem(
                    product_id=str(i.get("product_id") or i.get("id") or ""),
                    title=i["title"],
                    unit_price=money(i["unit_price"]),
                    quantity=Quantity(int(i["quantity"])),
                    snapshot=(
                        ProductSnapshot(
                            title=snap["title"],
                            price=money(snap["price"]),
                            sku=snap.get("sku"),
                            category=snap.get("category", ""),
                        )
                        if snap
                        else None
                    ),
                )
            )

        customer = raw.get("customer", {})
        created_at = datetime.fromisoformat(raw["created_at"])
        return Order(
            id=raw["id"],
            customer=CustomerInfo(
                name=customer.get("name", ""),
                email=customer.get("email", ""),
                phone=customer.get("phone", ""),
                shipping_address=customer.get("shipping_address", ""),
                city=customer.get("city", ""),
            ),
            items=items,
            status=OrderStatus.parse(raw["status"]),
            subtotal=money(raw.get("subtotal")),
            delivery_fee=money(raw.get("delivery_fee")),
            total_amount=money(raw.get("total_amount")),
            payment_method=raw.get("payment_method", "cod"),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            notes=raw.get("notes", ""),
            created_at=_aware(created_at),
            updated_at=_aware(datetime.fromisoformat(raw.get("updated_at", raw["created_at"]))),
        )


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
