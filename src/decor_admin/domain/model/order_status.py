"""Order status enumeration and the legal-transition table.

The table is the single source of truth for which status changes an
admin may request.  Terminal states only allow themselves.
"""

from __future__ import annotations

from enum import Enum

from decor_admin.domain.exceptions import ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(value: str | OrderStatus) -> OrderStatus:
        """Coerce a raw status string, rejecting anything outside the enum."""
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(value.strip().lower())
        except (ValueError, AttributeError) as exc:
            raise ValidationError(f"Unknown order status: {value!r}") from exc


ALLOWED_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (
        OrderStatus.PENDING,
        OrderStatus.PROCESSING,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.PROCESSING: (
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.SHIPPED: (
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
    ),
    OrderStatus.DELIVERED: (OrderStatus.DELIVERED,),
    OrderStatus.CANCELLED: (OrderStatus.CANCELLED,),
}

# The one edge that validates and deducts inventory.
STOCK_SENSITIVE_EDGE = (OrderStatus.PENDING, OrderStatus.PROCESSING)


def allowed_next_statuses(current: str | OrderStatus) -> list[OrderStatus]:
    """Statuses an order in *current* may be moved to (including itself)."""
    return list(ALLOWED_TRANSITIONS[OrderStatus.parse(current)])


def is_transition_allowed(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def is_terminal(status: OrderStatus) -> bool:
    return ALLOWED_TRANSITIONS[status] == (status,)


def is_stock_sensitive(current: OrderStatus, new: OrderStatus) -> bool:
    return (current, new) == STOCK_SENSITIVE_EDGE
