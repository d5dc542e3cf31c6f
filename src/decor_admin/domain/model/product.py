"""Product aggregate.

Products live independently of orders. Their stock is the shared
resource the order engine reads and deducts from; admins also edit it
directly when restocking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from decor_admin.domain.exceptions import InsufficientStockError, ValidationError
from decor_admin.domain.model.value_objects import Money


class ProductStatus(Enum):
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


@dataclass
class Product:
    """A catalog entry with a stock count.

    Invariant: ``stock`` is never negative.  The ``__init__`` does not
    re-check it so the repository can reconstitute records as stored;
    every mutation goes through the methods below.
    """

    id: str
    title: str
    price: Money
    stock: int = 0
    sku: str | None = None
    category: str = ""
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders keep the price captured in their item snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
        self._touch()

    def set_stock(self, quantity: int) -> None:
        """Overwrite the stock count (manual admin edit)."""
        if quantity < 0:
            raise ValidationError(f"Stock for {self.title} cannot be negative")
        self.stock = quantity
        self._touch()

    def adjust_stock(self, delta: int) -> int:
        """Add *delta* (negative to deduct) and return the new stock."""
        new_stock = self.stock + delta
        if new_stock < 0:
            raise InsufficientStockError(
                f"Insufficient stock for {self.title} "
                f"(need {-delta}, have {self.stock} available)"
            )
        self.stock = new_stock
        self._touch()
        return new_stock

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
