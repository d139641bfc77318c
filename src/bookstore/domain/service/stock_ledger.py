"""Domain service: Stock Ledger.

The single writer of a book's stock counter on the ordering path.
It never guards the counter with locks of its own; the repository's
conditional decrement is what keeps two callers from selling the same
last copy.
"""

from __future__ import annotations

import logging

from bookstore.domain.exceptions import (
    BookNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from bookstore.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


class StockLedger:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def check_and_reserve(self, book_id: str, quantity: int) -> int:
        """Take ``quantity`` units of a book and return the new stock level.

        Raises BookNotFoundError for an unknown book and
        InsufficientStockError when fewer than ``quantity`` units are left.
        """
        if quantity < 1:
            raise ValidationError("Reservation quantity must be positive")

        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)

        remaining = self._book_repo.decrement_if_available(book_id, quantity)
        if remaining is None:
            # Lost the race or never had enough; report what is there now.
            current = self._book_repo.get_by_id(book_id)
            available = current.quantity if current is not None else 0
            logger.warning(
                "Stock reservation rejected for book %s: requested %d, available %d",
                book_id, quantity, available,
            )
            raise InsufficientStockError(book_id, available, quantity, title=book.title)

        logger.debug("Reserved %d of book %s, %d left", quantity, book_id, remaining)
        return remaining
