"""Abstract unit of work.

Groups the repositories that share one transaction.  Use it as a
context manager; leaving the block without ``commit()`` rolls back
everything done inside it::

    with uow_factory() as uow:
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    books: BookRepository
    orders: OrderRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change done in this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
