"""Application service: Create Order use case.

Resolves each requested product, snapshots its catalog fields onto the
line item and lets the Order aggregate validate and total the order.
Stock is not touched here; it is deducted when the order moves to
processing.
"""

from __future__ import annotations

import logging

from decor_admin.application.dto import CustomerSpec, OrderDTO, OrderItemSpec
from decor_admin.application.show_order import ShowOrderHandler
from decor_admin.domain.exceptions import EntityNotFoundError
from decor_admin.domain.model.order import (
    CustomerInfo,
    Order,
    OrderItem,
    ProductSnapshot,
)
from decor_admin.domain.model.value_objects import Money, Quantity
from decor_admin.domain.repository.order_repository import OrderRepository
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        delivery_fee: Money,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._delivery_fee = delivery_fee

    def handle(
        self,
        customer: CustomerSpec,
        item_specs: list[OrderItemSpec],
        notes: str = "",
    ) -> OrderDTO:
        """Create a new pending order.

        Steps:
        1. Resolve each product title to a Product (fail if not found).
        2. Build OrderItems with *current* price and a product snapshot.
        3. Let the Order aggregate validate and compute totals.
        4. Persist and return a DTO.
        """
        items: list[OrderItem] = []

        for spec in item_specs:
            product = self._product_repo.get_by_title(spec.product_title)
            if product is None:
                raise EntityNotFoundError(
                    f"Product not found: '{spec.product_title}'"
                )

            items.append(
                OrderItem(
                    product_id=product.id,
                    title=product.title,
                    unit_price=product.price,
                    quantity=Quantity(spec.quantity),
                    snapshot=ProductSnapshot(
                        title=product.title,
                        price=product.price,
                        sku=product.sku,
                        category=product.category,
                    ),
                )
            )

        order = Order.create(
            customer=CustomerInfo(
                name=customer.name.strip(),
                email=customer.email,
                phone=customer.phone,
                shipping_address=customer.shipping_address,
                city=customer.city,
            ),
            items=items,
            delivery_fee=self._delivery_fee,
            notes=notes,
        )
        self._order_repo.save(order)
        logger.info("Created order #%s for %s (%d items)", order.id, order.customer.name, len(items))

        return ShowOrderHandler.to_dto(order)
