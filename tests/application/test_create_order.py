"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from decor_admin.application.create_order import CreateOrderHandler
from decor_admin.application.dto import CustomerSpec, OrderItemSpec
from decor_admin.domain.exceptions import EntityNotFoundError, ValidationError
from decor_admin.domain.model.order_status import OrderStatus
from decor_admin.domain.model.product import Product
from decor_admin.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup(
    products: list[Product] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id="1", title="Brass Vase", price=Money.of("1500.00"), stock=10, sku="BV-01", category="Vases"),
            Product(id="2", title="Jute Rug", price=Money.of("8000.00"), stock=2),
        ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, product_repo, delivery_fee=Money.of("200"))
    return handler, order_repo, product_repo


ALICE = CustomerSpec(name="Alice", city="Karachi")


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_totals(self):
        handler, _, _ = _setup()
        dto = handler.handle(ALICE, [
            OrderItemSpec("Brass Vase", 3),
            OrderItemSpec("Jute Rug", 1),
        ])
        assert dto.subtotal == "PKR 12500.00"
        assert dto.delivery_fee == "PKR 200.00"
        assert dto.total_amount == "PKR 12700.00"
        assert dto.status == "pending"
        assert dto.allowed_statuses == ["pending", "processing", "cancelled"]
        assert len(dto.items) == 2

    def test_title_lookup_is_case_insensitive(self):
        handler, _, _ = _setup()
        dto = handler.handle(ALICE, [OrderItemSpec("brass vase", 1)])
        assert dto.items[0].title == "Brass Vase"

    def test_persists_order_with_product_references(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(ALICE, [OrderItemSpec("Jute Rug", 1)])
        saved = order_repo.get_by_id(dto.id)
        assert saved.status == OrderStatus.PENDING
        assert saved.items[0].product_id == "2"

    def test_does_not_touch_stock(self):
        handler, _, product_repo = _setup()
        handler.handle(ALICE, [OrderItemSpec("Jute Rug", 5)])
        assert product_repo.get_by_id("2").stock == 2

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        dto1 = handler.handle(ALICE, [OrderItemSpec("Brass Vase", 1)])
        dto2 = handler.handle(CustomerSpec(name="Bilal"), [OrderItemSpec("Jute Rug", 1)])
        assert dto2.id == dto1.id + 1


class TestCreateOrderSnapshot:

    def test_snapshot_captures_catalog_fields(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(ALICE, [OrderItemSpec("Brass Vase", 1)])
        snap = order_repo.get_by_id(dto.id).items[0].snapshot
        assert snap.sku == "BV-01"
        assert snap.category == "Vases"
        assert snap.price == Money.of("1500.00")

    def test_price_change_does_not_affect_existing_order(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle(ALICE, [OrderItemSpec("Brass Vase", 1)])

        vase = product_repo.get_by_title("Brass Vase")
        vase.update_price(Money.of("9999.00"))
        product_repo.save(vase)

        saved = order_repo.get_by_id(dto.id)
        assert saved.total == Money.of("1700.00")


class TestCreateOrderValidation:

    def test_unknown_product_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(ALICE, [OrderItemSpec("Marble Bust", 1)])

    def test_negative_quantity_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(ALICE, [OrderItemSpec("Brass Vase", -1)])

    def test_missing_customer_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Customer name"):
            handler.handle(CustomerSpec(name=" "), [OrderItemSpec("Brass Vase", 1)])
