"""Abstract repository for Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Persist a new or updated book.

        For an existing book the stock counter is left as stored.
        """

    @abstractmethod
    def decrement_if_available(self, book_id: str, quantity: int) -> int | None:
        """Atomically take ``quantity`` units off the stock counter.

        The decrement happens only when the current quantity is at least
        ``quantity``.  Returns the new quantity, or None when the book is
        missing or does not have enough stock (nothing is changed then).
        """

    @abstractmethod
    def set_quantity(self, book_id: str, quantity: int) -> None:
        """Overwrite the stock counter (restock / stock correction)."""

    @abstractmethod
    def delete(self, book_id: str) -> None:
        """Remove a book from the catalog."""
