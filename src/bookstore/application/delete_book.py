"""Application service: Delete Book use case.

A book that appears on any order stays in the catalog: its line items
point at it.  Setting its quantity to 0 takes it off sale instead.
"""

from __future__ import annotations

import logging

from bookstore.domain.exceptions import BookNotFoundError, ValidationError
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class DeleteBookHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, book_id: str) -> None:
        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            if uow.orders.references_book(book_id):
                raise ValidationError(
                    f"Book '{book.title}' appears in existing orders and cannot be "
                    f"deleted; set its quantity to 0 instead"
                )
            uow.books.delete(book_id)
            uow.commit()

        logger.info("Book %s deleted", book_id)
