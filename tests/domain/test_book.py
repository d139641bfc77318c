"""Unit tests for the Book aggregate and partial updates."""

import pytest

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import UNSET, Book, BookPatch
from bookstore.domain.model.value_objects import Money


def _make_book(**overrides) -> Book:
    fields = dict(
        id="b1",
        title="Dune",
        author="Frank Herbert",
        isbn="9780441013593",
        genre="Science Fiction",
        price=Money.of("9.99"),
        quantity=5,
    )
    fields.update(overrides)
    return Book.create(**fields)


class TestBookCreation:

    def test_happy_path(self):
        book = _make_book(title="  Dune  ")
        assert book.title == "Dune"
        assert book.quantity == 5

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError, match="Title is required"):
            _make_book(title="")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _make_book(quantity=-1)

    def test_free_book_allowed(self):
        assert _make_book(price=Money.of("0")).price == Money.zero()


class TestBookPatch:

    def test_present_lists_only_supplied_fields(self):
        patch = BookPatch(title="Dune Messiah", quantity=0)
        assert patch.present() == {"title": "Dune Messiah", "quantity": 0}

    def test_absent_fields_are_kept(self):
        book = _make_book()
        book.apply(BookPatch(genre="Classic"))
        assert book.genre == "Classic"
        assert book.title == "Dune"
        assert book.quantity == 5

    def test_zero_quantity_is_applied(self):
        book = _make_book()
        book.apply(BookPatch(quantity=0))
        assert book.quantity == 0

    def test_zero_price_is_applied(self):
        book = _make_book()
        book.apply(BookPatch(price=Money.of("0")))
        assert book.price == Money.zero()

    def test_empty_description_is_applied(self):
        book = _make_book(description="Spice!")
        book.apply(BookPatch(description=""))
        assert book.description == ""

    def test_empty_title_rejected(self):
        book = _make_book()
        with pytest.raises(ValidationError, match="Title is required"):
            book.apply(BookPatch(title=" "))

    def test_bad_patch_leaves_book_untouched(self):
        book = _make_book()
        with pytest.raises(ValidationError, match="cannot be negative"):
            book.apply(BookPatch(title="Changed", quantity=-3))
        assert book.title == "Dune"
        assert book.quantity == 5

    def test_empty_patch_changes_nothing(self):
        book = _make_book()
        before = book.updated_at
        book.apply(BookPatch())
        assert book.updated_at == before
        assert BookPatch().title is UNSET
