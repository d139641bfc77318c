"""Application service: Update Book use case.

Also the restock path: a patch that sets ``quantity``.
"""

from __future__ import annotations

import logging

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.book import UNSET, BookPatch
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class UpdateBookHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, book_id: str, patch: BookPatch) -> BookDTO:
        """Apply a partial update to a book.

        Existing orders are not affected: they captured a title and
        price snapshot at creation time.
        """
        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            book.apply(patch)
            uow.books.save(book)
            if patch.quantity is not UNSET:
                uow.books.set_quantity(book.id, book.quantity)
            uow.commit()

        logger.info("Book %s updated: %s", book_id, ", ".join(sorted(patch.present())) or "no changes")
        return to_book_dto(book)
