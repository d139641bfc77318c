"""Integration tests for the catalog and user use cases."""

import pytest

from bookstore.application.add_book import AddBookHandler
from bookstore.application.add_user import AddUserHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.delete_book import DeleteBookHandler
from bookstore.application.list_books import ListBooksHandler
from bookstore.application.list_users import ListUsersHandler, ShowUserHandler
from bookstore.application.show_book import ShowBookHandler
from bookstore.application.update_book import UpdateBookHandler
from bookstore.domain.exceptions import (
    BookNotFoundError,
    ForbiddenError,
    UserNotFoundError,
    ValidationError,
)
from bookstore.domain.model.book import BookPatch
from bookstore.domain.model.value_objects import Money
from tests.application.helpers import SHIPPING, items, make_store
from tests.fakes import uow_factory


class TestAddBook:

    def test_adds_book(self):
        store = make_store({})
        dto = AddBookHandler(uow_factory(store)).handle(
            title="Emma", author="Jane Austen", isbn="978-0141439587",
            genre="Classic", price="7.99", quantity=4,
        )
        assert dto.price == "$7.99"
        assert store.quantity(dto.id) == 4
        assert [b.title for b in ListBooksHandler(uow_factory(store)).handle()] == ["Emma"]

    def test_negative_price_rejected(self):
        store = make_store({})
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddBookHandler(uow_factory(store)).handle(
                title="Emma", author="Jane Austen", isbn="1", genre="Classic", price="-1",
            )
        assert store.books == {}


class TestUpdateBook:

    def test_restock_with_zero_is_applied(self):
        store = make_store()
        dto = UpdateBookHandler(uow_factory(store)).handle("B2", BookPatch(quantity=0))
        assert dto.quantity == 0
        assert store.quantity("B2") == 0

    def test_title_change_keeps_stock(self):
        store = make_store()
        UpdateBookHandler(uow_factory(store)).handle("B2", BookPatch(title="New Title"))
        assert store.books["B2"].title == "New Title"
        assert store.quantity("B2") == 5

    def test_price_change_does_not_affect_existing_orders(self):
        store = make_store()
        factory = uow_factory(store)
        order = CreateOrderHandler(factory).handle("alice", items(("B3", 1)), SHIPPING, "PayPal")

        UpdateBookHandler(factory).handle("B3", BookPatch(price=Money.of("99.00"), title="Changed"))

        saved = store.orders[order.id]
        assert saved.items[0].unit_price == Money.of("20.00")
        assert saved.items[0].title == "Book B3"

    def test_unknown_book_rejected(self):
        store = make_store()
        with pytest.raises(BookNotFoundError):
            UpdateBookHandler(uow_factory(store)).handle("zzz", BookPatch(title="x"))


class TestAddUser:

    def test_registers_user_with_lowercased_email(self):
        store = make_store()
        user = AddUserHandler(uow_factory(store)).handle("Carol", "Carol@Example.com", is_admin=True)
        assert user.email == "carol@example.com"
        assert store.users[user.id].is_admin

    def test_duplicate_email_rejected(self):
        store = make_store()
        with pytest.raises(ValidationError, match="already exists"):
            AddUserHandler(uow_factory(store)).handle("Alice Again", "ALICE@example.com")


class TestShowAndDeleteBook:

    def test_show_book(self):
        store = make_store()
        dto = ShowBookHandler(uow_factory(store)).handle("B2")
        assert dto.title == "Book B2"
        assert dto.price == "$8.50"
        assert dto.quantity == 5

    def test_show_unknown_book(self):
        with pytest.raises(BookNotFoundError):
            ShowBookHandler(uow_factory(make_store())).handle("nope")

    def test_delete_unordered_book(self):
        store = make_store()
        DeleteBookHandler(uow_factory(store)).handle("B1")
        assert "B1" not in store.books

    def test_book_on_an_order_is_kept(self):
        store = make_store()
        factory = uow_factory(store)
        CreateOrderHandler(factory).handle("alice", items(("B3", 1)), SHIPPING, "PayPal")

        with pytest.raises(ValidationError, match="appears in existing orders"):
            DeleteBookHandler(factory).handle("B3")

        assert store.quantity("B3") == 9

    def test_delete_unknown_book(self):
        with pytest.raises(BookNotFoundError):
            DeleteBookHandler(uow_factory(make_store())).handle("nope")


class TestListAndShowUsers:

    def test_admin_lists_users(self):
        users = ListUsersHandler(uow_factory(make_store())).handle("admin")
        assert {u.id for u in users} == {"admin", "alice", "bob"}

    def test_customer_cannot_list_users(self):
        with pytest.raises(ForbiddenError, match="list users"):
            ListUsersHandler(uow_factory(make_store())).handle("alice")

    def test_admin_shows_user(self):
        dto = ShowUserHandler(uow_factory(make_store())).handle("admin", "bob")
        assert dto.email == "bob@example.com"
        assert not dto.is_admin

    def test_customer_cannot_show_user(self):
        with pytest.raises(ForbiddenError):
            ShowUserHandler(uow_factory(make_store())).handle("alice", "bob")

    def test_show_unknown_user(self):
        with pytest.raises(UserNotFoundError):
            ShowUserHandler(uow_factory(make_store())).handle("admin", "ghost")
