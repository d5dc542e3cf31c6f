"""Order aggregate.

The Order owns its line items and its status.  Status changes go
through ``change_status`` which enforces the transition table; the
inventory side of the ``pending -> processing`` edge is coordinated by
the application layer before the new status is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from decor_admin.domain.exceptions import IllegalTransitionError, ValidationError
from decor_admin.domain.model.order_status import (
    OrderStatus,
    is_terminal,
    is_transition_allowed,
)
from decor_admin.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str = ""
    phone: str = ""
    shipping_address: str = ""
    city: str = ""


@dataclass(frozen=True)
class ProductSnapshot:
    """Product fields copied onto an item when the order is placed.

    Keeps historical order views stable after catalog edits or deletes.
    """

    title: str
    price: Money
    sku: str | None = None
    category: str = ""


@dataclass
class OrderItem:
    product_id: str  # empty for legacy items saved without a reference
    title: str
    unit_price: Money  # locked at order-creation time
    quantity: Quantity
    snapshot: ProductSnapshot | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def has_product_reference(self) -> bool:
        return bool(self.product_id and self.product_id.strip())


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for storefront orders.

    Use ``Order.create()`` for new orders.  The plain ``__init__`` lets
    the repository reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer: CustomerInfo
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    # None on legacy records saved before totals were stored
    subtotal: Money | None = None
    delivery_fee: Money | None = None
    total_amount: Money | None = None
    payment_method: str = "cod"
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: CustomerInfo,
        items: list[OrderItem],
        delivery_fee: Money,
        notes: str = "",
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not customer.name or not customer.name.strip():
            raise ValidationError("Customer name is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        order = Order(
            id=None,
            customer=customer,
            items=list(items),
            notes=notes.strip(),
        )
        order.apply_delivery_fee(delivery_fee)
        return order

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Move to *new_status* if the transition table allows it.

        Inventory deduction for ``pending -> processing`` must already
        have happened (coordinated by the transition handler).
        """
        if not is_transition_allowed(self.status, new_status):
            raise IllegalTransitionError(
                f"Cannot move order from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)

    # --- Totals ---------------------------------------------------------------

    def apply_delivery_fee(self, delivery_fee: Money) -> None:
        """Set the fee and recompute ``subtotal`` and ``total_amount``."""
        self.delivery_fee = delivery_fee
        self.subtotal = self.computed_subtotal
        self.total_amount = self.subtotal + delivery_fee

    @property
    def has_totals(self) -> bool:
        return self.subtotal is not None and self.delivery_fee is not None

    @property
    def computed_subtotal(self) -> Money:
        currency = self.items[0].unit_price.currency if self.items else DEFAULT_CURRENCY
        result = Money.zero(currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def total(self) -> Money:
        """Stored total, or the item subtotal for legacy records."""
        if self.total_amount is not None:
            return self.total_amount
        subtotal = self.computed_subtotal
        if self.delivery_fee is not None:
            return subtotal + self.delivery_fee
        return subtotal

    # --- Queries --------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.status)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def contains_product(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)
