"""Application service: Show Book use case (query)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowBookHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, book_id: str) -> BookDTO:
        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return to_book_dto(book)
