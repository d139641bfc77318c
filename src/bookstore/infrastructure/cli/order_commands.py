"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from bookstore.application.dto import OrderDTO, OrderItemSpec, PaymentSpec, ShippingSpec
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import Container


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'bookid:3,otherid:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'BookID:Quantity'."
            )
        book_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for book '{book_id}'."
            )
        specs.append(OrderItemSpec(book_id=book_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    if dto.is_paid:
        click.echo(f"Paid:     {dto.paid_at}")
    if dto.is_delivered:
        click.echo(f"Delivered: {dto.delivered_at}  tracking={dto.tracking_number or '-'}")
    click.echo()

    click.echo(f"  {'Title':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.title[:30]:<30} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Items':<37} {dto.items_price:>20}")
    click.echo(f"  {'Shipping':<37} {dto.shipping_price:>20}")
    click.echo(f"  {'Tax':<37} {dto.tax_price:>20}")
    click.echo(f"  {'Order Total':<37} {dto.total_price:>20}")


@click.command("create")
@click.option("--user", "caller_id", required=True, help="ID of the customer placing the order.")
@click.option("--items", required=True, help="Items as 'BookID:Qty,BookID:Qty'.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--postal-code", required=True, help="Postal code.")
@click.option("--country", required=True, help="Country.")
@click.option("--payment-method", required=True, help="e.g. PayPal, card.")
@click.option("--shipping-price", default="0", help="Shipping cost.")
@click.option("--tax-price", default="0", help="Tax amount.")
@click.pass_obj
def order_create(
    container: Container,
    caller_id: str,
    items: str,
    address: str,
    city: str,
    postal_code: str,
    country: str,
    payment_method: str,
    shipping_price: str,
    tax_price: str,
) -> None:
    """Place a new order."""
    specs = _parse_items(items)

    try:
        dto = container.create_order().handle(
            caller_id=caller_id,
            item_specs=specs,
            shipping=ShippingSpec(
                address=address,
                city=city,
                postal_code=postal_code,
                country=country,
            ),
            payment_method=payment_method,
            shipping_price=shipping_price,
            tax_price=tax_price,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to pay.")
@click.option("--user", "caller_id", required=True, help="ID of the paying user.")
@click.option("--payment-id", default="", help="Payment provider transaction ID.")
@click.option("--payment-status", default="", help="Payment provider status.")
@click.option("--update-time", default="", help="Payment provider update time.")
@click.option("--email", "email_address", default="", help="Payer e-mail address.")
@click.pass_obj
def order_pay(
    container: Container,
    order_id: int,
    caller_id: str,
    payment_id: str,
    payment_status: str,
    update_time: str,
    email_address: str,
) -> None:
    """Mark an order as paid."""
    payment = PaymentSpec(
        id=payment_id,
        status=payment_status,
        update_time=update_time,
        email_address=email_address,
    )
    try:
        container.pay_order().handle(caller_id, order_id, payment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} paid.")


@click.command("deliver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to deliver.")
@click.option("--user", "caller_id", required=True, help="ID of the admin user.")
@click.option("--tracking-number", default="", help="Carrier tracking number.")
@click.pass_obj
def order_deliver(container: Container, order_id: int, caller_id: str, tracking_number: str) -> None:
    """Mark an order as delivered (admin only)."""
    try:
        container.deliver_order().handle(caller_id, order_id, tracking_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} delivered.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "caller_id", required=True, help="ID of the requesting user.")
@click.pass_obj
def order_show(container: Container, order_id: int, caller_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = container.show_order().handle(caller_id, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "caller_id", required=True, help="ID of the requesting user.")
@click.option("--all", "show_all", is_flag=True, default=False, help="Every order (admin only).")
@click.pass_obj
def order_list(container: Container, caller_id: str, show_all: bool) -> None:
    """List your orders, or every order with --all."""
    handler = container.list_orders()
    try:
        orders = handler.handle_all(caller_id) if show_all else handler.handle_mine(caller_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':>6}  {'Status':<10} {'Total':>12}  {'Created':<20}")
    click.echo("-" * 52)
    for dto in orders:
        click.echo(f"{dto.id:>6}  {dto.status:<10} {dto.total_price:>12}  {dto.created_at:<20}")
