"""Shared setup for the application-layer tests."""

from __future__ import annotations

from bookstore.application.dto import OrderItemSpec, ShippingSpec
from bookstore.domain.model.book import Book
from bookstore.domain.model.user import User
from bookstore.domain.model.value_objects import Money
from tests.fakes import FakeStore

SHIPPING = ShippingSpec(
    address="1 Main St",
    city="Springfield",
    postal_code="12345",
    country="US",
)


def make_store(stock: dict[str, int] | None = None) -> FakeStore:
    """Store with an admin, two customers and a few books."""
    if stock is None:
        stock = {"B1": 1, "B2": 5, "B3": 10}
    prices = {"B1": "12.00", "B2": "8.50", "B3": "20.00"}
    books = [
        Book(
            id=book_id,
            title=f"Book {book_id}",
            author="Someone",
            isbn=f"isbn-{book_id}",
            genre="Fiction",
            price=Money.of(prices.get(book_id, "10.00")),
            quantity=qty,
        )
        for book_id, qty in stock.items()
    ]
    users = [
        User(id="admin", name="Admin", email="admin@example.com", is_admin=True),
        User(id="alice", name="Alice", email="alice@example.com"),
        User(id="bob", name="Bob", email="bob@example.com"),
    ]
    return FakeStore(books=books, users=users)


def items(*pairs: tuple[str, int]) -> list[OrderItemSpec]:
    return [OrderItemSpec(book_id, qty) for book_id, qty in pairs]
