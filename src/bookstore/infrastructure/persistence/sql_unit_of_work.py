"""SQLAlchemy implementation of UnitOfWork.

One connection and one transaction per unit of work.  Storage errors
never leak out as SQLAlchemy exceptions: they are logged with their
full detail and re-raised as TransactionFailure after the rollback.
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import TransactionFailure
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure.persistence.sql_book_repository import SqlBookRepository
from bookstore.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from bookstore.infrastructure.persistence.sql_user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlUnitOfWork:
        try:
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        except SQLAlchemyError as exc:
            self._close()
            logger.exception("Could not open a database transaction")
            raise TransactionFailure() from exc
        self.books = SqlBookRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.users = SqlUserRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._close()
        if isinstance(exc, SQLAlchemyError):
            logger.error("Transaction rolled back after storage error", exc_info=exc)
            raise TransactionFailure() from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("Unit of work is not active")
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            logger.exception("Commit failed")
            raise TransactionFailure() from exc

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            try:
                self._transaction.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback failed")

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
