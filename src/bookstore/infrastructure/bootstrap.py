"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from bookstore.application.add_book import AddBookHandler
from bookstore.application.add_user import AddUserHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.delete_book import DeleteBookHandler
from bookstore.application.deliver_order import DeliverOrderHandler
from bookstore.application.list_books import ListBooksHandler
from bookstore.application.list_orders import ListOrdersHandler
from bookstore.application.list_users import ListUsersHandler, ShowUserHandler
from bookstore.application.pay_order import PayOrderHandler
from bookstore.application.show_book import ShowBookHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_book import UpdateBookHandler
from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from bookstore.infrastructure.persistence.tables import metadata


def build_engine(database_url: str) -> Engine:
    """Create the engine and make sure the schema exists."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(
                url, connect_args={"check_same_thread": False, "timeout": 15}
            )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(url, pool_pre_ping=True)

    metadata.create_all(engine)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@dataclass
class Container:
    """Handlers built from one set of settings."""

    settings: Settings
    engine: Engine

    @staticmethod
    def from_settings(settings: Settings) -> Container:
        return Container(settings=settings, engine=build_engine(settings.database_url))

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self.engine)

    def create_order(self) -> CreateOrderHandler:
        return CreateOrderHandler(self.unit_of_work, stock_policy=self.settings.stock_policy)

    def pay_order(self) -> PayOrderHandler:
        return PayOrderHandler(self.unit_of_work, stock_policy=self.settings.stock_policy)

    def deliver_order(self) -> DeliverOrderHandler:
        return DeliverOrderHandler(
            self.unit_of_work,
            require_payment=self.settings.require_payment_before_delivery,
        )

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.unit_of_work)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.unit_of_work)

    def add_book(self) -> AddBookHandler:
        return AddBookHandler(self.unit_of_work)

    def list_books(self) -> ListBooksHandler:
        return ListBooksHandler(self.unit_of_work)

    def update_book(self) -> UpdateBookHandler:
        return UpdateBookHandler(self.unit_of_work)

    def add_user(self) -> AddUserHandler:
        return AddUserHandler(self.unit_of_work)

    def show_book(self) -> ShowBookHandler:
        return ShowBookHandler(self.unit_of_work)

    def delete_book(self) -> DeleteBookHandler:
        return DeleteBookHandler(self.unit_of_work)

    def list_users(self) -> ListUsersHandler:
        return ListUsersHandler(self.unit_of_work)

    def show_user(self) -> ShowUserHandler:
        return ShowUserHandler(self.unit_of_work)
