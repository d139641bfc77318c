"""CLI commands for the Book aggregate."""

from __future__ import annotations

import click

from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.book import UNSET, BookPatch
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--title", required=True, help="Book title.")
@click.option("--author", required=True, help="Author name.")
@click.option("--isbn", required=True, help="ISBN (unique).")
@click.option("--genre", required=True, help="Genre.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--quantity", default=0, type=click.IntRange(min=0), help="Copies in stock.")
@click.option("--description", default="", help="Short description.")
@click.pass_obj
def book_add(
    container: Container,
    title: str,
    author: str,
    isbn: str,
    genre: str,
    price: str,
    quantity: int,
    description: str,
) -> None:
    """Add a new book to the catalog."""
    try:
        dto = container.add_book().handle(
            title=title,
            author=author,
            isbn=isbn,
            genre=genre,
            price=price,
            quantity=quantity,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {dto.id} '{dto.title}' added at {dto.price} ({dto.quantity} in stock)")


@click.command("list")
@click.pass_obj
def book_list(container: Container) -> None:
    """List all books in the catalog."""
    books = container.list_books().handle()

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<34} {'Title':<30} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 83)
    for b in books:
        click.echo(f"{b.id:<34} {b.title[:30]:<30} {b.price:>10} {b.quantity:>6}")


@click.command("update")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--author", default=None, help="New author.")
@click.option("--isbn", default=None, help="New ISBN.")
@click.option("--genre", default=None, help="New genre.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--quantity", default=None, type=int, help="New stock level (restock).")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def book_update(
    container: Container,
    book_id: str,
    title: str | None,
    author: str | None,
    isbn: str | None,
    genre: str | None,
    price: str | None,
    quantity: int | None,
    description: str | None,
) -> None:
    """Update some fields of a book; options left out keep their value."""

    def given(value):
        return UNSET if value is None else value

    try:
        patch = BookPatch(
            title=given(title),
            author=given(author),
            isbn=given(isbn),
            genre=given(genre),
            price=UNSET if price is None else Money.of(price),
            quantity=given(quantity),
            description=given(description),
        )
        dto = container.update_book().handle(book_id, patch)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {dto.id} updated: '{dto.title}' {dto.price}, {dto.quantity} in stock")


@click.command("show")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.pass_obj
def book_show(container: Container, book_id: str) -> None:
    """Show one book."""
    try:
        dto = container.show_book().handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {dto.id}")
    click.echo(f"Title:   {dto.title}")
    click.echo(f"Author:  {dto.author}")
    click.echo(f"ISBN:    {dto.isbn}")
    click.echo(f"Genre:   {dto.genre}")
    click.echo(f"Price:   {dto.price}")
    click.echo(f"Stock:   {dto.quantity}")


@click.command("delete")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.pass_obj
def book_delete(container: Container, book_id: str) -> None:
    """Remove a book that no order refers to."""
    try:
        container.delete_book().handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book_id} deleted.")
