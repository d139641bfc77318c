"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.model.user import User


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (book ID + quantity)."""

    book_id: str
    quantity: int


@dataclass(frozen=True)
class ShippingSpec:
    """Input: the shipping address as typed by the customer."""

    address: str
    city: str
    postal_code: str
    country: str


@dataclass(frozen=True)
class PaymentSpec:
    """Input: what the payment provider reported back."""

    id: str = ""
    status: str = ""
    update_time: str = ""
    email_address: str = ""


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    book_id: str
    title: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: str
    status: str
    items: list[OrderLineItemDTO]
    shipping_address: str
    payment_method: str
    items_price: str
    shipping_price: str
    tax_price: str
    total_price: str
    is_paid: bool
    paid_at: str | None
    is_delivered: bool
    delivered_at: str | None
    tracking_number: str | None
    created_at: str


@dataclass(frozen=True)
class BookDTO:

    id: str
    title: str
    author: str
    isbn: str
    genre: str
    price: str
    quantity: int


@dataclass(frozen=True)
class UserDTO:

    id: str
    name: str
    email: str
    is_admin: bool
    created_at: str


def _fmt(moment: datetime | None) -> str | None:
    if moment is None:
        return None
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def to_order_dto(order: Order) -> OrderDTO:
    address = order.shipping_address
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                book_id=item.book_id,
                title=item.title,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        shipping_address=(
            f"{address.address}, {address.city} {address.postal_code}, {address.country}"
        ),
        payment_method=order.payment_method,
        items_price=str(order.items_price),
        shipping_price=str(order.shipping_price),
        tax_price=str(order.tax_price),
        total_price=str(order.total_price),
        is_paid=order.is_paid,
        paid_at=_fmt(order.paid_at),
        is_delivered=order.is_delivered,
        delivered_at=_fmt(order.delivered_at),
        tracking_number=order.tracking_number,
        created_at=_fmt(order.created_at),  # type: ignore[arg-type]
    )


def to_book_dto(book: Book) -> BookDTO:
    return BookDTO(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        genre=book.genre,
        price=str(book.price),
        quantity=book.quantity,
    )


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        created_at=_fmt(user.created_at),  # type: ignore[arg-type]
    )
