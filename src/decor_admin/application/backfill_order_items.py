"""Application service: Backfill Order Item product references.

Older orders stored line items with only a title.  Stock deduction
needs a product ID, so this matches each such item to a catalog product
by case-insensitive title and writes the ID back onto the order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from decor_admin.domain.exceptions import PersistenceError
from decor_admin.domain.model.order import Order
from decor_admin.domain.model.product import Product
from decor_admin.domain.repository.order_repository import OrderRepository
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class BackfillSummary:
    fixed: int = 0
    skipped: int = 0
    errors: int = 0
    unmatched_titles: list[str] = field(default_factory=list)


class BackfillOrderItemsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self) -> BackfillSummary:
        products_by_title = {
            p.title.lower(): p for p in self._product_repo.list_all()
        }
        summary = BackfillSummary()

        for order in self._order_repo.list_all():
            if all(item.has_product_reference for item in order.items):
                summary.skipped += 1
                continue

            # The fill runs on the stored order so a concurrent status
            # change is not overwritten by this listing's copy.
            unmatched: list[str] = []
            try:
                written = self._order_repo.update(
                    order.id,  # type: ignore[arg-type]
                    lambda current: _fill_references(current, products_by_title, unmatched),
                )
            except PersistenceError:
                logger.exception("Could not update order #%s", order.id)
                summary.errors += 1
                continue

            for title in unmatched:
                logger.warning("Order #%s: no product matches '%s'", order.id, title)
            summary.unmatched_titles.extend(unmatched)

            if written:
                logger.info("Order #%s: product references filled in", order.id)
                summary.fixed += 1
            else:
                summary.skipped += 1

        return summary


def _fill_references(
    order: Order,
    products_by_title: dict[str, Product],
    unmatched: list[str],
) -> bool:
    changed = False
    for item in order.items:
        if item.has_product_reference:
            continue
        product = products_by_title.get(item.title.lower())
        if product is None:
            unmatched.append(item.title)
            continue
        item.product_id = product.id
        changed = True
    return changed
