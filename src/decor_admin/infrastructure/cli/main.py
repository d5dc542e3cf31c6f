import click

from decor_admin.infrastructure.cli.order_commands import (
    order_backfill_items,
    order_create,
    order_delete,
    order_list,
    order_recalc_totals,
    order_show,
    order_status,
    order_transitions,
)
from decor_admin.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
    product_set_stock,
    product_update,
)
from decor_admin.infrastructure.config import get_settings
from decor_admin.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Decor Admin: order status and stock back office."""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products and stock."""


# Register subcommands
order.add_command(order_backfill_items)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_recalc_totals)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_transitions)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_set_stock)
product.add_command(product_update)
