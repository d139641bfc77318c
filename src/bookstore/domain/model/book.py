"""Book aggregate.

Books are owned by the catalog and referenced by orders. The only
counter that orders touch is ``quantity``, and only through the
stock ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


@dataclass(frozen=True)
class BookPatch:
    """Partial update for a Book.

    A field left as ``UNSET`` keeps the current value. Anything else,
    including ``0`` and ``""``, replaces it.
    """

    title: str | _Unset = UNSET
    author: str | _Unset = UNSET
    isbn: str | _Unset = UNSET
    genre: str | _Unset = UNSET
    price: Money | _Unset = UNSET
    quantity: int | _Unset = UNSET
    description: str | _Unset = UNSET

    def present(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass
class Book:
    """A book in the catalog.

    Invariants:
    - ``quantity`` is a non-negative integer
    - ``price`` is non-negative (enforced by Money)
    """

    id: str
    title: str
    author: str
    isbn: str
    genre: str
    price: Money
    quantity: int = 0
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        _check_quantity(self.quantity)

    @staticmethod
    def create(
        id: str,
        title: str,
        author: str,
        isbn: str,
        genre: str,
        price: Money,
        quantity: int = 0,
        description: str = "",
    ) -> Book:
        """Create a new catalog entry, enforcing required fields."""
        for label, value in (("Title", title), ("Author", author), ("ISBN", isbn), ("Genre", genre)):
            _check_required(label, value)
        return Book(
            id=id,
            title=title.strip(),
            author=author.strip(),
            isbn=isbn.strip(),
            genre=genre.strip(),
            price=price,
            quantity=quantity,
            description=description.strip(),
        )

    def apply(self, patch: BookPatch) -> None:
        """Merge a patch into this book.

        All values are validated before anything is assigned, so a bad
        patch leaves the book untouched.
        """
        changes = patch.present()
        for name in ("title", "author", "isbn", "genre"):
            if name in changes:
                _check_required(name.capitalize(), changes[name])
                changes[name] = changes[name].strip()
        if "price" in changes and not isinstance(changes["price"], Money):
            raise ValidationError("Price must be a Money amount")
        if "quantity" in changes:
            _check_quantity(changes["quantity"])

        for name, value in changes.items():
            setattr(self, name, value)
        if changes:
            self.updated_at = datetime.now(timezone.utc)


def _check_required(label: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")


def _check_quantity(value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Stock quantity must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"Stock quantity cannot be negative, got {value}")
