"""Application service: manual stock edits (set / restock)."""

from __future__ import annotations

import logging

from decor_admin.domain.exceptions import EntityNotFoundError, ValidationError
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> None:
        """Overwrite the stock count for a product."""
        product = self._product_repo.update(product_id, lambda current: current.set_stock(quantity))
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Stock for %s set to %d", product.title, quantity)


class RestockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> int:
        """Add *quantity* units and return the new stock."""
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")

        new_stock = self._product_repo.adjust_stock(product_id, quantity)
        if new_stock is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Restocked product %s by %d (now %d)", product_id, quantity, new_stock)
        return new_stock
