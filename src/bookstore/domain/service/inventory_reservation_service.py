"""Domain service: Inventory Reservation.

Coordinates the cross-aggregate operation of taking stock for every
line of an order and persisting the order with it.

The two-phase approach (validate-then-mutate) means a multi-line order
that fails on line k never touches lines 1..k-1.  Everything runs
inside the caller's unit of work, so a failure after the first
decrement (a lost race, a storage fault) is undone by rollback.
"""

from __future__ import annotations

import logging

from bookstore.domain.exceptions import BookNotFoundError, InsufficientStockError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class InventoryReservationService:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow
        self._ledger = StockLedger(uow.books)

    def validate_availability(self, order: Order) -> None:
        """Phase 1: fail fast, in line order, before any mutation.

        Repeated lines for the same book are checked against what the
        earlier lines already claimed.
        """
        claimed: dict[str, int] = {}
        books: dict[str, Book] = {}

        for line in order.items:
            book = books.get(line.book_id) or self._uow.books.get_by_id(line.book_id)
            if book is None:
                raise BookNotFoundError(line.book_id)
            books[book.id] = book

            already = claimed.get(book.id, 0)
            requested = line.quantity.value
            available = book.quantity - already
            if available < requested:
                logger.warning(
                    "Order for user %s rejected: book %s requested %d, available %d",
                    order.user_id, book.id, requested, available,
                )
                raise InsufficientStockError(book.id, available, requested, title=book.title)
            claimed[book.id] = already + requested

    def reserve_for_order(self, order: Order) -> None:
        """Validate every line, then decrement every line."""
        self.validate_availability(order)

        # Phase 2: conditional decrements; a concurrent buyer may still win.
        for line in order.items:
            self._ledger.check_and_reserve(line.book_id, line.quantity.value)

    def reserve_and_save(self, order: Order) -> Order:
        """Reserve stock for ``order``, persist it and commit, all or nothing."""
        self.reserve_for_order(order)
        self._uow.orders.save(order)
        self._uow.commit()
        return order
