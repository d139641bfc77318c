"""Caller checks shared by the order use cases.

The caller's identity arrives already authenticated; these helpers only
resolve it through the user store and decide what it may touch.
"""

from __future__ import annotations

from bookstore.domain.exceptions import ForbiddenError, UserNotFoundError
from bookstore.domain.model.order import Order
from bookstore.domain.model.user import User
from bookstore.domain.repository.unit_of_work import UnitOfWork


def load_caller(uow: UnitOfWork, caller_id: str) -> User:
    user = uow.users.get_by_id(caller_id)
    if user is None:
        raise UserNotFoundError(caller_id)
    return user


def ensure_may_manage(caller: User, order: Order, action: str) -> None:
    """Owner or admin only."""
    if not caller.may_manage(order.user_id):
        raise ForbiddenError(f"Not authorized to {action} order #{order.id}")


def ensure_admin(caller: User, action: str) -> None:
    if not caller.is_admin:
        raise ForbiddenError(f"Admin access required to {action}")
