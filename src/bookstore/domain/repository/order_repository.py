"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return the orders placed by one user, oldest first."""

    @abstractmethod
    def references_book(self, book_id: str) -> bool:
        """True when any order has a line item for ``book_id``."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert a new order (``id is None``) and assign its ID.

        Line items are written once, here.  Later state changes go
        through the conditional transitions below.
        """

    @abstractmethod
    def mark_paid_if_unpaid(self, order: Order) -> bool:
        """Store the payment fields of ``order`` unless the stored order is paid.

        The check and the write are one atomic step.  Returns False when
        the stored order was already paid (or is missing); nothing is
        written then.
        """

    @abstractmethod
    def mark_delivered_if_undelivered(self, order: Order) -> bool:
        """Store the delivery fields of ``order`` unless already delivered.

        Same contract as ``mark_paid_if_unpaid``.
        """
