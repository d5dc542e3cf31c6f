"""Application service: Add Product use case."""

from __future__ import annotations

from decor_admin.domain.exceptions import ValidationError
from decor_admin.domain.model.product import Product
from decor_admin.domain.model.value_objects import Money
from decor_admin.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, currency: str) -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        title: str,
        price: str,
        stock: int = 0,
        sku: str | None = None,
        category: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        if not title or not title.strip():
            raise ValidationError("Product title is required")

        existing = self._product_repo.get_by_title(title)
        if existing is not None:
            raise ValidationError(f"Product '{title}' already exists")

        # Auto-assign ID based on existing numeric product IDs
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        product = Product(
            id=next_id,
            title=title.strip(),
            price=Money.of(price, self._currency),
            sku=sku,
            category=category,
        )
        product.update_price(product.price)
        product.set_stock(stock)
        self._product_repo.save(product)
        return product
