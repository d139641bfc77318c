"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts shared through a ``FakeStore``.  Writes
land immediately and every unit of work keeps an undo log, so a
rollback reverses exactly its own changes even while other threads
are writing.
"""

from __future__ import annotations

import threading
from copy import deepcopy
from dataclasses import replace
from typing import Callable

from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.model.user import User
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.repository.user_repository import UserRepository


class FakeStore:

    def __init__(
        self,
        books: list[Book] | None = None,
        users: list[User] | None = None,
    ) -> None:
        self.lock = threading.RLock()
        self.books: dict[str, Book] = {b.id: replace(b) for b in books or []}
        self.users: dict[str, User] = {u.id: replace(u) for u in users or []}
        self.orders: dict[int, Order] = {}
        self.next_order_id = 1
        self.fail_order_save = False
        self.on_decrement: Callable[[str], None] | None = None

    def quantity(self, book_id: str) -> int:
        return self.books[book_id].quantity


Undo = list[Callable[[], None]]


class FakeBookRepository(BookRepository):

    def __init__(self, store: FakeStore, undo: Undo) -> None:
        self._store = store
        self._undo = undo

    def get_by_id(self, book_id: str) -> Book | None:
        with self._store.lock:
            book = self._store.books.get(book_id)
            return replace(book) if book is not None else None

    def list_all(self) -> list[Book]:
        with self._store.lock:
            return [replace(b) for b in self._store.books.values()]

    def save(self, book: Book) -> None:
        with self._store.lock:
            previous = self._store.books.get(book.id)
            stored = replace(book)
            if previous is not None:
                stored.quantity = previous.quantity
            self._store.books[book.id] = stored
            self._undo.append(lambda: self._restore(book.id, previous))

    def decrement_if_available(self, book_id: str, quantity: int) -> int | None:
        with self._store.lock:
            if self._store.on_decrement is not None:
                self._store.on_decrement(book_id)
            book = self._store.books.get(book_id)
            if book is None or book.quantity < quantity:
                return None
            book.quantity -= quantity
            self._undo.append(lambda: self._add(book_id, quantity))
            return book.quantity

    def set_quantity(self, book_id: str, quantity: int) -> None:
        with self._store.lock:
            book = self._store.books[book_id]
            delta = quantity - book.quantity
            book.quantity = quantity
            self._undo.append(lambda: self._add(book_id, -delta))

    def delete(self, book_id: str) -> None:
        with self._store.lock:
            previous = self._store.books.pop(book_id)
            self._undo.append(lambda: self._store.books.update({book_id: previous}))

    def _add(self, book_id: str, quantity: int) -> None:
        self._store.books[book_id].quantity += quantity

    def _restore(self, book_id: str, previous: Book | None) -> None:
        if previous is None:
            self._store.books.pop(book_id, None)
        else:
            current = self._store.books[book_id].quantity
            self._store.books[book_id] = replace(previous, quantity=current)


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore, undo: Undo) -> None:
        self._store = store
        self._undo = undo

    def get_by_id(self, order_id: int) -> Order | None:
        with self._store.lock:
            order = self._store.orders.get(order_id)
            return deepcopy(order) if order is not None else None

    def list_all(self) -> list[Order]:
        with self._store.lock:
            return [deepcopy(o) for o in self._store.orders.values()]

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def references_book(self, book_id: str) -> bool:
        with self._store.lock:
            return any(
                item.book_id == book_id
                for order in self._store.orders.values()
                for item in order.items
            )

    def save(self, order: Order) -> None:
        with self._store.lock:
            if self._store.fail_order_save:
                raise RuntimeError("simulated storage fault")
            if order.id is not None:
                raise ValueError(f"Order #{order.id} is already stored")
            order.id = order_id = self._store.next_order_id
            self._store.next_order_id += 1
            self._store.orders[order_id] = deepcopy(order)
            self._undo.append(lambda: self._restore(order_id, None))

    def mark_paid_if_unpaid(self, order: Order) -> bool:
        return self._transition(
            order, "is_paid", ("is_paid", "paid_at", "payment_result", "updated_at")
        )

    def mark_delivered_if_undelivered(self, order: Order) -> bool:
        return self._transition(
            order, "is_delivered", ("is_delivered", "delivered_at", "tracking_number", "updated_at")
        )

    def _transition(self, order: Order, flag: str, names: tuple[str, ...]) -> bool:
        with self._store.lock:
            previous = self._store.orders.get(order.id)
            if previous is None or getattr(previous, flag):
                return False
            updated = deepcopy(previous)
            for name in names:
                setattr(updated, name, deepcopy(getattr(order, name)))
            self._store.orders[order.id] = updated
            order_id = order.id
            self._undo.append(lambda: self._restore(order_id, previous))
            return True

    def _restore(self, order_id: int, previous: Order | None) -> None:
        if previous is None:
            self._store.orders.pop(order_id, None)
        else:
            self._store.orders[order_id] = previous


class FakeUserRepository(UserRepository):

    def __init__(self, store: FakeStore, undo: Undo) -> None:
        self._store = store
        self._undo = undo

    def get_by_id(self, user_id: str) -> User | None:
        with self._store.lock:
            user = self._store.users.get(user_id)
            return replace(user) if user is not None else None

    def get_by_email(self, email: str) -> User | None:
        with self._store.lock:
            for u in self._store.users.values():
                if u.email.lower() == email.lower():
                    return replace(u)
        return None

    def list_all(self) -> list[User]:
        with self._store.lock:
            users = [replace(u) for u in self._store.users.values()]
        return sorted(users, key=lambda u: (u.created_at, u.id))

    def save(self, user: User) -> None:
        with self._store.lock:
            previous = self._store.users.get(user.id)
            self._store.users[user.id] = replace(user)
            self._undo.append(lambda: self._restore(user.id, previous))

    def _restore(self, user_id: str, previous: User | None) -> None:
        if previous is None:
            self._store.users.pop(user_id, None)
        else:
            self._store.users[user_id] = previous


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._undo: Undo = []
        self.books = FakeBookRepository(store, self._undo)
        self.orders = FakeOrderRepository(store, self._undo)
        self.users = FakeUserRepository(store, self._undo)
        self.committed = False

    def commit(self) -> None:
        with self._store.lock:
            self._undo.clear()
        self.committed = True

    def rollback(self) -> None:
        with self._store.lock:
            while self._undo:
                self._undo.pop()()


def uow_factory(store: FakeStore) -> Callable[[], FakeUnitOfWork]:
    return lambda: FakeUnitOfWork(store)
