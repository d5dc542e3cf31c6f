"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import click

from decor_admin.application.backfill_order_items import BackfillOrderItemsHandler
from decor_admin.application.create_order import CreateOrderHandler
from decor_admin.application.delete_order import DeleteOrderHandler
from decor_admin.application.dto import CustomerSpec, OrderDTO, OrderItemSpec
from decor_admin.application.list_orders import ListOrdersHandler, OrderFilters
from decor_admin.application.recalculate_totals import RecalculateTotalsHandler
from decor_admin.application.show_order import ShowOrderHandler
from decor_admin.application.transition_order import TransitionOrderHandler
from decor_admin.domain.exceptions import DomainException
from decor_admin.domain.model.order_status import OrderStatus, allowed_next_statuses
from decor_admin.infrastructure.bootstrap import order_repository, product_repository
from decor_admin.infrastructure.config import get_settings

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'Brass Vase:3,Jute Rug:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductTitle:Quantity'."
            )
        title, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{title}'."
            )
        specs.append(OrderItemSpec(product_title=title.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.title:<28} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Subtotal':<34} {dto.subtotal:>29}")
    click.echo(f"  {'Delivery fee':<34} {dto.delivery_fee:>29}")
    click.echo(f"  {'Order Total':<34} {dto.total_amount:>29}")
    click.echo()
    click.echo(f"Next statuses: {', '.join(dto.allowed_statuses)}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--email", default="", help="Customer email.")
@click.option("--phone", default="", help="Customer phone.")
@click.option("--address", default="", help="Shipping address.")
@click.option("--city", default="", help="City.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--notes", default="", help="Order notes.")
def order_create(
    customer: str,
    email: str,
    phone: str,
    address: str,
    city: str,
    items: str,
    notes: str,
) -> None:
    """Create a new pending order."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        delivery_fee=get_settings().delivery_fee_money,
    )

    try:
        dto = handler.handle(
            customer=CustomerSpec(
                name=customer,
                email=email,
                phone=phone,
                shipping_address=address,
                city=city,
            ),
            item_specs=specs,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


def _utc(value: datetime | None) -> datetime | None:
    return value.replace(tzinfo=timezone.utc) if value is not None else None


@click.command("list")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.option("--product", "product_id", default=None, help="Only orders containing this product ID.")
@click.option("--since", type=click.DateTime(), default=None, help="Created on/after (UTC).")
@click.option("--until", type=click.DateTime(), default=None, help="Created on/before (UTC).")
@click.option("--min-amount", type=Decimal, default=None, help="Minimum order total.")
@click.option("--max-amount", type=Decimal, default=None, help="Maximum order total.")
def order_list(
    status: str | None,
    product_id: str | None,
    since: datetime | None,
    until: datetime | None,
    min_amount: Decimal | None,
    max_amount: Decimal | None,
) -> None:
    """List orders, newest first."""
    filters = OrderFilters(
        status=OrderStatus.parse(status) if status else None,
        product_id=product_id,
        start_date=_utc(since),
        end_date=_utc(until),
        min_amount=min_amount,
        max_amount=max_amount,
    )
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(filters)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<24} {'Status':<11} {'Total':>14} {'Created':>22}")
    click.echo("-" * 81)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.customer_name:<24} {o.status:<11} {o.total_amount:>14} {o.created_at:>22}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICE, help="New status.")
@click.option(
    "--from",
    "current_status",
    type=_STATUS_CHOICE,
    default=None,
    help="Status you expect the order to be in (defaults to its stored status).",
)
def order_status(order_id: int, new_status: str, current_status: str | None) -> None:
    """Change an order's status (pending -> processing deducts stock)."""
    settings = get_settings()
    orders = order_repository(settings)
    handler = TransitionOrderHandler(
        order_repo=orders,
        product_repo=product_repository(settings),
        on_unresolved_item=settings.on_unresolved_item,
    )

    try:
        if current_status is None:
            current_status = ShowOrderHandler(orders).handle(order_id).status
        result = handler.handle(order_id, new_status, current_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.success:
        if result.stock_issues:
            click.echo(f"{'Product':<28} {'Requested':>10} {'Available':>10}", err=True)
            for issue in result.stock_issues:
                click.echo(
                    f"{issue.title:<28} {issue.requested:>10} {issue.available:>10}", err=True
                )
        raise click.ClickException(result.error or "Status change failed")

    for skipped in result.skipped_items:
        click.echo(f"Skipped '{skipped.title}' x{skipped.quantity}: {skipped.reason}")
    click.echo(f"Order #{order_id} moved to {new_status}.")


@click.command("transitions")
@click.option("--status", required=True, type=_STATUS_CHOICE, help="Current status.")
def order_transitions(status: str) -> None:
    """Show which statuses an order may move to."""
    click.echo(", ".join(s.value for s in allowed_next_statuses(status)))


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.confirmation_option(prompt="Delete this order?")
def order_delete(order_id: int) -> None:
    """Delete a pending, delivered or cancelled order."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("backfill-items")
def order_backfill_items() -> None:
    """Fill in missing product IDs on order items by matching titles."""
    handler = BackfillOrderItemsHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Fixed:   {summary.fixed} orders")
    click.echo(f"Skipped: {summary.skipped} orders")
    click.echo(f"Errors:  {summary.errors} orders")
    for title in summary.unmatched_titles:
        click.echo(f"  no product matches '{title}'")


@click.command("recalc-totals")
def order_recalc_totals() -> None:
    """Fill in subtotal and delivery fee on orders that lack them."""
    handler = RecalculateTotalsHandler(
        order_repo=order_repository(),
        default_delivery_fee=get_settings().delivery_fee_money,
    )

    try:
        updated = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Updated {updated} orders.")
