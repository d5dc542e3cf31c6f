"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from decor_admin.domain.model.product import Product, ProductStatus
from decor_admin.domain.model.value_objects import DEFAULT_CURRENCY, Money
from decor_admin.domain.repository.product_repository import ProductRepository
from decor_admin.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_title(self, title: str) -> Product | None:
        wanted = title.strip().lower()
        for raw in self._file.load():
            if raw["title"].lower() == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))
            self._file.persist(records)

    def delete(self, product_id: str) -> None:
        with self._file.lock:
            records = self._file.load()
            remaining = [raw for raw in records if raw["id"] != product_id]
            if len(remaining) != len(records):
                self._file.persist(remaining)

    def update(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    product = self._to_domain(raw)
                    change(product)
                    records[i] = self._to_raw(product)
                    self._file.persist(records)
                    return product
            return None

    def adjust_stock(self, product_id: str, delta: int) -> int | None:
        product = self.update(product_id, lambda p: p.adjust_stock(delta))
        return product.stock if product is not None else None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "sku": product.sku,
            "category": product.category,
            "status": product.status.value,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        product = Product(
            id=raw["id"],
            title=raw["title"],
            price=Money(Decimal(str(raw["price"])), raw.get("currency", DEFAULT_CURRENCY)),
            stock=int(raw.get("stock", 0)),
            sku=raw.get("sku"),
            category=raw.get("category", ""),
            status=ProductStatus(raw.get("status", "active")),
        )
        if "created_at" in raw:
            product.created_at = datetime.fromisoformat(raw["created_at"])
        if "updated_at" in raw:
            product.updated_at = datetime.fromisoformat(raw["updated_at"])
        return product
