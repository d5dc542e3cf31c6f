"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from decor_admin.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_title(self, title: str) -> Product | None:
        """Return a product by case-insensitive title, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Unknown IDs are ignored."""

    @abstractmethod
    def update(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        """Apply *change* to the stored product and persist it atomically.

        *change* receives the current record, never a caller's stale copy,
        so fields it does not touch (stock in particular) keep their
        latest value.  Returns the updated product, or None if unknown.
        """

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> int | None:
        """Atomically add *delta* to a product's stock.

        Returns the new stock, or None if the product does not exist.
        Raises InsufficientStockError (nothing written) if the result
        would be negative.
        """
