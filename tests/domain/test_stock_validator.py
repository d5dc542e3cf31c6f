"""Unit tests for the StockValidator domain service."""

from decor_admin.domain.model.order import CustomerInfo, Order, OrderItem
from decor_admin.domain.model.product import Product
from decor_admin.domain.model.stock import StockShortfall, UnresolvedItemPolicy
from decor_admin.domain.model.value_objects import Money, Quantity
from decor_admin.domain.service.stock_validator import StockValidator
from tests.fakes import FakeProductRepository


def _make_order(items: list[tuple[str, str, int]]) -> Order:
    """Create an order with given (product_id, title, qty) tuples."""
    line_items = [
        OrderItem(
            product_id=pid,
            title=title,
            unit_price=Money.of("1000.00"),
            quantity=Quantity(qty),
        )
        for pid, title, qty in items
    ]
    return Order(id=1, customer=CustomerInfo(name="Test"), items=line_items)


def _make_catalog(*specs: tuple[str, str, int]) -> FakeProductRepository:
    """Create repo with (product_id, title, stock) tuples."""
    return FakeProductRepository(
        [Product(id=pid, title=title, price=Money.of("1000"), stock=stock) for pid, title, stock in specs]
    )


class TestValidStock:

    def test_all_items_in_stock(self):
        repo = _make_catalog(("p1", "Brass Vase", 10), ("p2", "Jute Rug", 4))
        result = StockValidator(repo).validate(
            _make_order([("p1", "Brass Vase", 10), ("p2", "Jute Rug", 1)])
        )
        assert result.valid
        assert result.shortfalls == []

    def test_validation_does_not_mutate_stock(self):
        repo = _make_catalog(("p1", "Brass Vase", 10))
        StockValidator(repo).validate(_make_order([("p1", "Brass Vase", 4)]))
        assert repo.get_by_id("p1").stock == 10


class TestShortfalls:

    def test_under_stocked_item_reported(self):
        repo = _make_catalog(("p1", "Brass Vase", 3))
        result = StockValidator(repo).validate(_make_order([("p1", "Brass Vase", 5)]))
        assert not result.valid
        assert result.shortfalls == [StockShortfall("p1", "Brass Vase", requested=5, available=3)]

    def test_zero_stock_reported(self):
        repo = _make_catalog(("p1", "Brass Vase", 0))
        result = StockValidator(repo).validate(_make_order([("p1", "Brass Vase", 1)]))
        assert result.shortfalls[0].available == 0

    def test_missing_product_is_full_shortfall(self):
        repo = _make_catalog()
        result = StockValidator(repo).validate(_make_order([("gone", "Old Mirror", 2)]))
        assert result.shortfalls == [StockShortfall("gone", "Old Mirror", requested=2, available=0)]

    def test_only_failing_items_listed(self):
        repo = _make_catalog(("p1", "Brass Vase", 10), ("p2", "Jute Rug", 1), ("p3", "Cushion", 5))
        result = StockValidator(repo).validate(
            _make_order([("p1", "Brass Vase", 2), ("p2", "Jute Rug", 2), ("p3", "Cushion", 5)])
        )
        assert [s.product_id for s in result.shortfalls] == ["p2"]

    def test_reads_current_stock_each_call(self):
        repo = _make_catalog(("p1", "Brass Vase", 5))
        validator = StockValidator(repo)
        order = _make_order([("p1", "Brass Vase", 5)])
        assert validator.validate(order).valid

        repo.adjust_stock("p1", -1)
        assert not validator.validate(order).valid


class TestUnreferencedItems:

    def test_skipped_under_skip_policy(self):
        repo = _make_catalog(("p1", "Brass Vase", 10))
        result = StockValidator(repo, UnresolvedItemPolicy.SKIP).validate(
            _make_order([("p1", "Brass Vase", 1), ("", "Legacy Item", 2)])
        )
        assert result.valid
        assert [s.title for s in result.skipped] == ["Legacy Item"]

    def test_shortfall_under_fail_policy(self):
        repo = _make_catalog(("p1", "Brass Vase", 10))
        result = StockValidator(repo, UnresolvedItemPolicy.FAIL).validate(
            _make_order([("", "Legacy Item", 2)])
        )
        assert not result.valid
        assert result.shortfalls == [StockShortfall("", "Legacy Item", requested=2, available=0)]


class TestRepeatedProduct:

    def test_lines_for_same_product_are_totalled(self):
        repo = _make_catalog(("p1", "Brass Vase", 5))
        result = StockValidator(repo).validate(
            _make_order([("p1", "Brass Vase", 3), ("p1", "Brass Vase", 3)])
        )
        assert not result.valid
        assert result.shortfalls == [StockShortfall("p1", "Brass Vase", requested=6, available=5)]

    def test_repeated_lines_within_stock_pass(self):
        repo = _make_catalog(("p1", "Brass Vase", 6))
        result = StockValidator(repo).validate(
            _make_order([("p1", "Brass Vase", 3), ("p1", "Brass Vase", 3)])
        )
        assert result.valid
