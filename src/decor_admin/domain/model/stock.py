"""Value types produced by the stock validator and deductor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from decor_admin.domain.model.order import OrderItem


class UnresolvedItemPolicy(Enum):
    """What to do with an order item whose product cannot be resolved."""

    SKIP = "skip"  # log it, leave it out, keep processing the rest
    FAIL = "fail"  # treat it as a blocking error


@dataclass(frozen=True)
class StockShortfall:
    product_id: str
    title: str
    requested: int
    available: int


@dataclass(frozen=True)
class SkippedItem:
    product_id: str
    title: str
    quantity: int
    reason: str

    @staticmethod
    def for_item(item: OrderItem, reason: str) -> SkippedItem:
        return SkippedItem(
            product_id=item.product_id,
            title=item.title,
            quantity=item.quantity.value,
            reason=reason,
        )


@dataclass(frozen=True)
class StockValidationResult:
    shortfalls: list[StockShortfall] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.shortfalls


@dataclass(frozen=True)
class StockDeduction:
    product_id: str
    quantity: int
    new_stock: int


@dataclass
class DeductionReport:
    """What a deduction run changed, so it can be reversed."""

    deducted: list[StockDeduction] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)

    @property
    def nothing_deducted(self) -> bool:
        return not self.deducted
