"""Application service: Add Book use case."""

from __future__ import annotations

import uuid

from bookstore.application.dto import BookDTO, to_book_dto
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class AddBookHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        title: str,
        author: str,
        isbn: str,
        genre: str,
        price: str,
        quantity: int = 0,
        description: str = "",
    ) -> BookDTO:
        """Add a new book to the catalog."""
        book = Book.create(
            id=uuid.uuid4().hex,
            title=title,
            author=author,
            isbn=isbn,
            genre=genre,
            price=Money.of(price),
            quantity=quantity,
            description=description,
        )
        with self._uow_factory() as uow:
            uow.books.save(book)
            uow.commit()
        return to_book_dto(book)
