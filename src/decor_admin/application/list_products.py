"""Application service: List Products use case (query)."""

from __future__ import annotations

from decor_admin.application.dto import ProductDTO
from decor_admin.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, low_stock_threshold: int | None = None) -> list[ProductDTO]:
        products = self._product_repo.list_all()
        if low_stock_threshold is not None:
            products = [p for p in products if p.stock <= low_stock_threshold]
        return [
            ProductDTO(
                id=p.id,
                title=p.title,
                price=str(p.price),
                stock=p.stock,
                status=p.status.value,
            )
            for p in products
        ]
