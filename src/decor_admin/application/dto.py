"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from decor_admin.domain.model.stock import SkippedItem, StockShortfall


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product title + quantity)."""

    product_title: str
    quantity: int


@dataclass(frozen=True)
class CustomerSpec:
    """Input: customer details captured at checkout."""

    name: str
    email: str = ""
    phone: str = ""
    shipping_address: str = ""
    city: str = ""


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    title: str
    quantity: int
    unit_price: str  # formatted, e.g. "PKR 1500.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    status: str
    allowed_statuses: list[str]
    items: list[OrderItemDTO]
    subtotal: str
    delivery_fee: str
    total_amount: str
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    title: str
    price: str
    stock: int
    status: str


@dataclass(frozen=True)
class StockIssueDTO:
    """One under-stocked or missing item, enough to prompt a restock."""

    product_id: str
    title: str
    requested: int
    available: int

    @staticmethod
    def from_shortfall(shortfall: StockShortfall) -> StockIssueDTO:
        return StockIssueDTO(
            product_id=shortfall.product_id,
            title=shortfall.title,
            requested=shortfall.requested,
            available=shortfall.available,
        )


@dataclass(frozen=True)
class SkippedItemDTO:
    product_id: str
    title: str
    quantity: int
    reason: str

    @staticmethod
    def from_skipped(skipped: SkippedItem) -> SkippedItemDTO:
        return SkippedItemDTO(
            product_id=skipped.product_id,
            title=skipped.title,
            quantity=skipped.quantity,
            reason=skipped.reason,
        )


class TransitionFailure(Enum):
    ILLEGAL_TRANSITION = "illegal_transition"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NO_RESOLVABLE_ITEMS = "no_resolvable_items"


@dataclass(frozen=True)
class TransitionResult:
    """Output of a status change request.

    Failures here are expected outcomes the admin can act on; store and
    lookup errors are raised instead.
    """

    success: bool
    reason: TransitionFailure | None = None
    error: str | None = None
    stock_issues: list[StockIssueDTO] = field(default_factory=list)
    skipped_items: list[SkippedItemDTO] = field(default_factory=list)

    @staticmethod
    def ok(skipped: list[SkippedItem] | None = None) -> TransitionResult:
        return TransitionResult(
            success=True,
            skipped_items=[SkippedItemDTO.from_skipped(s) for s in skipped or []],
        )

    @staticmethod
    def failed(
        reason: TransitionFailure,
        error: str,
        shortfalls: list[StockShortfall] | None = None,
    ) -> TransitionResult:
        return TransitionResult(
            success=False,
            reason=reason,
            error=error,
            stock_issues=[StockIssueDTO.from_shortfall(s) for s in shortfalls or []],
        )
