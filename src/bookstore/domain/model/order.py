"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items.
Line items are price and title snapshots taken at purchase time and
never change afterwards; only the payment and delivery flags move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Mapping

from bookstore.domain.exceptions import (
    AlreadyDeliveredError,
    AlreadyPaidError,
    BookNotFoundError,
    OrderNotPaidError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import (
    Money,
    PaymentResult,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    CREATED = "CREATED"
    PAID = "PAID"
    DELIVERED = "DELIVERED"


class StockPolicy(Enum):
    """When an order takes its books off the shelf."""

    RESERVE_ON_CREATE = "reserve_on_create"
    RESERVE_ON_PAYMENT = "reserve_on_payment"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the title and price of a book at order-creation time."""

    book_id: str
    title: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class DraftLine:
    book_id: str
    quantity: Quantity


@dataclass(frozen=True)
class OrderDraft:
    """A validated checkout request that has not touched any store yet."""

    user_id: str
    lines: tuple[DraftLine, ...]
    shipping_address: ShippingAddress
    payment_method: str
    shipping_price: Money
    tax_price: Money

    @staticmethod
    def create(
        user_id: str,
        items: list[tuple[str, int]],
        shipping_address: ShippingAddress,
        payment_method: str,
        shipping_price: Money | None = None,
        tax_price: Money | None = None,
    ) -> OrderDraft:
        """Validate a checkout request.

        ``items`` is a list of ``(book_id, quantity)`` pairs in the order
        the customer supplied them.
        """
        if not user_id:
            raise ValidationError("Order owner is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        lines = []
        for book_id, qty in items:
            if not book_id or not str(book_id).strip():
                raise ValidationError("Book ID is required")
            lines.append(DraftLine(book_id=str(book_id).strip(), quantity=Quantity(qty)))

        if not isinstance(shipping_address, ShippingAddress):
            raise ValidationError("Shipping address is required")

        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        return OrderDraft(
            user_id=user_id,
            lines=tuple(lines),
            shipping_address=shipping_address,
            payment_method=payment_method.strip(),
            shipping_price=Money.zero() if shipping_price is None else shipping_price,
            tax_price=Money.zero() if tax_price is None else tax_price,
        )


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` is kept simple
    so the repository can reconstitute persisted orders; it only checks
    that each flag agrees with its timestamp.
    """

    id: int | None
    user_id: str
    items: tuple[OrderLineItem, ...]
    shipping_address: ShippingAddress
    payment_method: str
    shipping_price: Money = field(default_factory=Money.zero)
    tax_price: Money = field(default_factory=Money.zero)
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_result: PaymentResult | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    tracking_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.items = tuple(self.items)
        if self.is_paid != (self.paid_at is not None):
            raise ValidationError("Paid flag and paid timestamp disagree")
        if self.is_delivered != (self.delivered_at is not None):
            raise ValidationError("Delivered flag and delivered timestamp disagree")

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(draft: OrderDraft, books: Mapping[str, Book]) -> Order:
        """Turn a draft into an order, snapshotting title and price.

        ``books`` must hold every book referenced by the draft.
        """
        items = []
        for line in draft.lines:
            book = books.get(line.book_id)
            if book is None:
                raise BookNotFoundError(line.book_id)
            items.append(
                OrderLineItem(
                    book_id=book.id,
                    title=book.title,
                    quantity=line.quantity,
                    unit_price=book.price,  # <-- price snapshot
                )
            )

        return Order(
            id=None,
            user_id=draft.user_id,
            items=tuple(items),
            shipping_address=draft.shipping_address,
            payment_method=draft.payment_method,
            shipping_price=draft.shipping_price,
            tax_price=draft.tax_price,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, payment_result: PaymentResult, now: datetime | None = None) -> None:
        """Transition unpaid -> paid. Happens exactly once."""
        if self.is_paid:
            raise AlreadyPaidError(self.id)
        now = now or datetime.now(timezone.utc)
        self.is_paid = True
        self.paid_at = now
        self.payment_result = payment_result
        self.updated_at = now

    def mark_delivered(
        self,
        tracking_number: str = "",
        now: datetime | None = None,
        require_paid: bool = False,
    ) -> None:
        """Transition undelivered -> delivered. Happens exactly once.

        Payment is only checked when ``require_paid`` is set.
        """
        if self.is_delivered:
            raise AlreadyDeliveredError(self.id)
        if require_paid and not self.is_paid:
            raise OrderNotPaidError(self.id)
        now = now or datetime.now(timezone.utc)
        self.is_delivered = True
        self.delivered_at = now
        self.tracking_number = tracking_number or ""
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def status(self) -> OrderStatus:
        if self.is_delivered:
            return OrderStatus.DELIVERED
        if self.is_paid:
            return OrderStatus.PAID
        return OrderStatus.CREATED

    @property
    def items_price(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def total_price(self) -> Money:
        return self.items_price + self.shipping_price + self.tax_price

