"""CLI commands for the Product aggregate and its stock."""

from __future__ import annotations

import click

from decor_admin.application.add_product import AddProductHandler
from decor_admin.application.list_products import ListProductsHandler
from decor_admin.application.set_stock import RestockHandler, SetStockHandler
from decor_admin.application.update_product import UpdateProductHandler
from decor_admin.domain.exceptions import DomainException
from decor_admin.infrastructure.bootstrap import product_repository
from decor_admin.infrastructure.config import get_settings


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--price", required=True, help="Price (e.g. 1500.00).")
@click.option("--stock", default=0, type=click.IntRange(min=0), help="Initial stock.")
@click.option("--sku", default=None, help="Stock keeping unit.")
@click.option("--category", default="", help="Category name.")
def product_add(title: str, price: str, stock: int, sku: str | None, category: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        currency=get_settings().currency,
    )

    try:
        product = handler.handle(title=title, price=price, stock=stock, sku=sku, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.title}' added at {product.price} (stock {product.stock})")


@click.command("list")
@click.option("--low-stock", type=int, default=None, help="Only products at or below this stock.")
def product_list(low_stock: int | None) -> None:
    """List products with their stock."""
    handler = ListProductsHandler(product_repo=product_repository())
    try:
        products = handler.handle(low_stock_threshold=low_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Title':<28} {'Price':>14} {'Stock':>7} {'Status':>9}")
    click.echo("-" * 68)
    for p in products:
        click.echo(f"{p.id:<6} {p.title:<28} {p.price:>14} {p.stock:>7} {p.status:>9}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 2999.00).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {price}")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def product_set_stock(product_id: str, quantity: int) -> None:
    """Overwrite the stock count for a product."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product #{product_id} set to {quantity}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockHandler(product_repo=product_repository())

    try:
        new_stock = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} restocked, now {new_stock} in stock")
