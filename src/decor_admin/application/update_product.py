"""Application service: change a product's price."""

from __future__ import annotations

import logging

from decor_admin.domain.exceptions import EntityNotFoundError
from decor_admin.domain.model.product import Product
from decor_admin.domain.model.value_objects import Money
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> Product:
        """Reprice a product in place.

        Only the price field is rewritten, on the stored record, so a
        stock deduction landing at the same moment is kept.  Orders are
        unaffected: their items carry a price snapshot.
        """
        product = self._product_repo.update(
            product_id,
            lambda current: current.update_price(Money.of(new_price, current.price.currency)),
        )
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Price of %s is now %s", product.title, product.price)
        return product
