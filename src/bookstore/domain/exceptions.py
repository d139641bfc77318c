"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The caller is known but not allowed to perform the action."""


class TransactionFailure(DomainException):
    """The storage layer failed to commit; nothing was applied."""

    def __init__(self, message: str = "The request could not be completed, please retry") -> None:
        super().__init__(message)


class BookNotFoundError(EntityNotFoundError):

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book '{book_id}' not found")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class UserNotFoundError(EntityNotFoundError):

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class InsufficientStockError(ValidationError):
    """Carries the numbers so the caller can show them."""

    def __init__(self, book_id: str, available: int, requested: int, title: str | None = None) -> None:
        self.book_id = book_id
        self.available = available
        self.requested = requested
        label = title or book_id
        super().__init__(
            f"Insufficient stock for {label} "
            f"(requested {requested}, {available} available)"
        )


class AlreadyPaidError(ValidationError):

    def __init__(self, order_id: int | None) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} is already paid")


class AlreadyDeliveredError(ValidationError):

    def __init__(self, order_id: int | None) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} is already delivered")


class OrderNotPaidError(ValidationError):

    def __init__(self, order_id: int | None) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} must be paid before delivery")
