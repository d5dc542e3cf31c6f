"""Application service: Transition Order Status use case.

Orchestrates the status change of an order:

1. reject edges that are not in the transition table;
2. under a per-order lock, re-read the order and make sure it is still
   in the status the caller saw;
3. on ``pending -> processing`` validate stock, then deduct it;
4. compare-and-set the new status, restoring stock if that write fails.

Stock problems come back as a structured ``TransitionResult`` so the
admin can be told exactly what to restock.  Missing orders and store
failures propagate as exceptions.
"""

from __future__ import annotations

import logging

from decor_admin.application.dto import TransitionFailure, TransitionResult
from decor_admin.application.keyed_lock import KeyedLock
from decor_admin.domain.exceptions import EntityNotFoundError, InsufficientStockError
from decor_admin.domain.model.order import Order
from decor_admin.domain.model.order_status import (
    OrderStatus,
    is_stock_sensitive,
    is_transition_allowed,
)
from decor_admin.domain.model.stock import DeductionReport, UnresolvedItemPolicy
from decor_admin.domain.repository.order_repository import OrderRepository
from decor_admin.domain.repository.product_repository import ProductRepository
from decor_admin.domain.service.stock_deductor import StockDeductor
from decor_admin.domain.service.stock_validator import StockValidator

logger = logging.getLogger(__name__)

# Shared by every handler in the process unless one is injected.
_DEFAULT_LOCKS = KeyedLock()


class TransitionOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        on_unresolved_item: UnresolvedItemPolicy = UnresolvedItemPolicy.SKIP,
        locks: KeyedLock | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._validator = StockValidator(product_repo, on_unresolved_item)
        self._deductor = StockDeductor(product_repo, on_unresolved_item)
        self._locks = locks if locks is not None else _DEFAULT_LOCKS

    def handle(
        self,
        order_id: int,
        new_status: str | OrderStatus,
        current_status: str | OrderStatus,
    ) -> TransitionResult:
        new = OrderStatus.parse(new_status)
        current = OrderStatus.parse(current_status)
        logger.info("Status change requested for order #%s: %s -> %s", order_id, current.value, new.value)

        if not is_transition_allowed(current, new):
            logger.warning("Rejected illegal transition %s -> %s for order #%s", current.value, new.value, order_id)
            return TransitionResult.failed(
                TransitionFailure.ILLEGAL_TRANSITION,
                f"Cannot move order from {current.value} to {new.value}",
            )

        with self._locks.hold(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            if order.status != current:
                return self._stale(order, current)

            report: DeductionReport | None = None
            if is_stock_sensitive(current, new):
                outcome = self._reserve_stock(order)
                if isinstance(outcome, TransitionResult):
                    return outcome
                report = outcome

            try:
                written = self._order_repo.update_status(order_id, current, new)
            except Exception:
                if report is not None:
                    self._deductor.restore(report)
                raise

            if not written:
                if report is not None:
                    self._deductor.restore(report)
                latest = self._order_repo.get_by_id(order_id) or order
                return self._stale(latest, current)

        logger.info("Order #%s is now %s", order_id, new.value)
        return TransitionResult.ok(report.skipped if report is not None else None)

    # --- Stock-sensitive edge -------------------------------------------------

    def _reserve_stock(self, order: Order) -> DeductionReport | TransitionResult:
        """Validate then deduct; a TransitionResult means "stop here"."""
        validation = self._validator.validate(order)
        if not validation.valid:
            logger.info(
                "Order #%s blocked by stock: %s",
                order.id,
                ", ".join(f"{s.title} ({s.requested}/{s.available})" for s in validation.shortfalls),
            )
            return TransitionResult.failed(
                TransitionFailure.INSUFFICIENT_STOCK,
                "Insufficient stock",
                validation.shortfalls,
            )

        try:
            report = self._deductor.deduct(order)
        except InsufficientStockError:
            # stock moved between validation and deduction; deductor rolled back
            recheck = self._validator.validate(order)
            return TransitionResult.failed(
                TransitionFailure.INSUFFICIENT_STOCK,
                "Insufficient stock",
                recheck.shortfalls,
            )

        if report.nothing_deducted:
            return TransitionResult.failed(
                TransitionFailure.NO_RESOLVABLE_ITEMS,
                f"None of the items in order #{order.id} reference an existing product",
            )
        return report

    @staticmethod
    def _stale(order: Order, expected: OrderStatus) -> TransitionResult:
        logger.warning(
            "Order #%s is %s, caller expected %s", order.id, order.status.value, expected.value
        )
        return TransitionResult.failed(
            TransitionFailure.ILLEGAL_TRANSITION,
            f"Order #{order.id} is {order.status.value}, not {expected.value}",
        )
