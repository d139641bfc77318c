"""SQLAlchemy-backed implementation of BookRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.tables import books


class SqlBookRepository(BookRepository):
    """Books table access bound to one connection (and its transaction).

    ``save`` never rewrites the stock counter of an existing book; the
    counter only moves through ``decrement_if_available`` and
    ``set_quantity``.
    """

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: str) -> Book | None:
        row = self._conn.execute(select(books).where(books.c.id == book_id)).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Book]:
        rows = self._conn.execute(select(books).order_by(books.c.title, books.c.id)).mappings()
        return [self._to_domain(row) for row in rows]

    def save(self, book: Book) -> None:
        raw = self._to_raw(book)
        catalog_fields = {k: v for k, v in raw.items() if k not in ("id", "quantity", "created_at")}
        result = self._conn.execute(
            update(books).where(books.c.id == book.id).values(**catalog_fields)
        )
        if result.rowcount == 0:
            self._conn.execute(insert(books).values(**raw))

    def decrement_if_available(self, book_id: str, quantity: int) -> int | None:
        result = self._conn.execute(
            update(books)
            .where(books.c.id == book_id, books.c.quantity >= quantity)
            .values(
                quantity=books.c.quantity - quantity,
                updated_at=_now().isoformat(),
            )
        )
        if result.rowcount != 1:
            return None
        return self._conn.execute(
            select(books.c.quantity).where(books.c.id == book_id)
        ).scalar_one()

    def set_quantity(self, book_id: str, quantity: int) -> None:
        self._conn.execute(
            update(books)
            .where(books.c.id == book_id)
            .values(quantity=quantity, updated_at=_now().isoformat())
        )

    def delete(self, book_id: str) -> None:
        self._conn.execute(delete(books).where(books.c.id == book_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(book: Book) -> dict:
        return {
            "id": book.id,
            "title": book.title,
            "author": book.author,
            "isbn": book.isbn,
            "genre": book.genre,
            "price": book.price.to_raw(),
            "quantity": book.quantity,
            "description": book.description,
            "created_at": book.created_at.isoformat(),
            "updated_at": book.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Book:
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            isbn=row["isbn"],
            genre=row["genre"],
            price=Money(Decimal(row["price"])),
            quantity=row["quantity"],
            description=row["description"] or "",
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)
