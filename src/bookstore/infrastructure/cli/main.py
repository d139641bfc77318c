import logging

import click
from sqlalchemy.exc import SQLAlchemyError

from bookstore.infrastructure.bootstrap import Container
from bookstore.infrastructure.cli.book_commands import (
    book_add,
    book_delete,
    book_list,
    book_show,
    book_update,
)
from bookstore.infrastructure.cli.order_commands import (
    order_create,
    order_deliver,
    order_list,
    order_pay,
    order_show,
)
from bookstore.infrastructure.cli.user_commands import user_add, user_list, user_show
from bookstore.infrastructure.config import ConfigurationError, Settings

logger = logging.getLogger(__name__)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Bookstore — catalog, customers and orders"""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        ctx.obj = Container.from_settings(settings)
    except SQLAlchemyError as exc:
        logger.exception("Could not open database")
        raise click.ClickException(f"Could not open database: {exc.__class__.__name__}")


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def book() -> None:
    """Manage the catalog."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
book.add_command(book_add)
book.add_command(book_delete)
book.add_command(book_list)
book.add_command(book_show)
book.add_command(book_update)
user.add_command(user_add)
user.add_command(user_list)
user.add_command(user_show)
