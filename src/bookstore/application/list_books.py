"""Application service: List Books use case (query)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class ListBooksHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[BookDTO]:
        with self._uow_factory() as uow:
            books = uow.books.list_all()
        return [to_book_dto(book) for book in books]
