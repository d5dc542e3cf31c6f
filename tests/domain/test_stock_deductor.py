"""Unit tests for the StockDeductor domain service."""

import pytest

from decor_admin.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PersistenceError,
)
from decor_admin.domain.model.order import CustomerInfo, Order, OrderItem
from decor_admin.domain.model.product import Product
from decor_admin.domain.model.stock import UnresolvedItemPolicy
from decor_admin.domain.model.value_objects import Money, Quantity
from decor_admin.domain.service.stock_deductor import StockDeductor
from tests.fakes import FakeProductRepository


def _make_order(items: list[tuple[str, str, int]]) -> Order:
    line_items = [
        OrderItem(product_id=pid, title=title, unit_price=Money.of("500"), quantity=Quantity(qty))
        for pid, title, qty in items
    ]
    return Order(id=1, customer=CustomerInfo(name="Test"), items=line_items)


def _make_catalog(*specs: tuple[str, int]) -> FakeProductRepository:
    return FakeProductRepository(
        [Product(id=pid, title=f"Product {pid}", price=Money.of("500"), stock=stock) for pid, stock in specs]
    )


class FailingProductRepository(FakeProductRepository):
    """Raises a store error when a given product is decremented."""

    def __init__(self, products, fail_on: str) -> None:
        super().__init__(products)
        self._fail_on = fail_on

    def adjust_stock(self, product_id: str, delta: int) -> int | None:
        if product_id == self._fail_on and delta < 0:
            raise PersistenceError("write rejected")
        return super().adjust_stock(product_id, delta)


class TestDeduct:

    def test_deducts_every_item_once(self):
        repo = _make_catalog(("p1", 10), ("p2", 7))
        report = StockDeductor(repo).deduct(_make_order([("p1", "Vase", 5), ("p2", "Rug", 7)]))

        assert repo.get_by_id("p1").stock == 5
        assert repo.get_by_id("p2").stock == 0
        assert [(d.product_id, d.quantity, d.new_stock) for d in report.deducted] == [
            ("p1", 5, 5),
            ("p2", 7, 0),
        ]

    def test_missing_product_skipped(self):
        repo = _make_catalog(("p1", 10))
        report = StockDeductor(repo).deduct(
            _make_order([("p1", "Vase", 2), ("deleted", "Old Mirror", 1)])
        )

        assert repo.get_by_id("p1").stock == 8
        assert [s.title for s in report.skipped] == ["Old Mirror"]
        assert report.skipped[0].reason == "product not found"

    def test_unreferenced_item_skipped(self):
        repo = _make_catalog(("p1", 10))
        report = StockDeductor(repo).deduct(_make_order([("", "Legacy", 1), ("p1", "Vase", 1)]))
        assert repo.get_by_id("p1").stock == 9
        assert report.skipped[0].reason == "missing product reference"

    def test_all_skipped_reports_nothing_deducted(self):
        report = StockDeductor(_make_catalog()).deduct(_make_order([("x", "Ghost", 1)]))
        assert report.nothing_deducted


class TestFailPolicy:

    def test_missing_product_raises_and_rolls_back(self):
        repo = _make_catalog(("p1", 10))
        deductor = StockDeductor(repo, UnresolvedItemPolicy.FAIL)

        with pytest.raises(EntityNotFoundError, match="Old Mirror"):
            deductor.deduct(_make_order([("p1", "Vase", 2), ("deleted", "Old Mirror", 1)]))

        assert repo.get_by_id("p1").stock == 10


class TestRollback:

    def test_store_failure_restores_earlier_items(self):
        products = [
            Product(id="p1", title="Vase", price=Money.of("500"), stock=10),
            Product(id="p2", title="Rug", price=Money.of("500"), stock=10),
        ]
        repo = FailingProductRepository(products, fail_on="p2")

        with pytest.raises(PersistenceError):
            StockDeductor(repo).deduct(_make_order([("p1", "Vase", 4), ("p2", "Rug", 1)]))

        assert repo.get_by_id("p1").stock == 10
        assert repo.get_by_id("p2").stock == 10

    def test_stock_drop_after_validation_rolls_back(self):
        repo = _make_catalog(("p1", 10), ("p2", 1))
        with pytest.raises(InsufficientStockError):
            StockDeductor(repo).deduct(_make_order([("p1", "Vase", 3), ("p2", "Rug", 2)]))

        assert repo.get_by_id("p1").stock == 10
        assert repo.get_by_id("p2").stock == 1

    def test_restore_gives_back_deducted_quantities(self):
        repo = _make_catalog(("p1", 10))
        deductor = StockDeductor(repo)
        report = deductor.deduct(_make_order([("p1", "Vase", 6)]))
        assert repo.get_by_id("p1").stock == 4

        deductor.restore(report)
        assert repo.get_by_id("p1").stock == 10
        assert report.nothing_deducted
