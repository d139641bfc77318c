"""Application service: Add User use case."""

from __future__ import annotations

import uuid

from bookstore.application.dto import UserDTO, to_user_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.user import User
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class AddUserHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, name: str, email: str, is_admin: bool = False) -> UserDTO:
        """Register a user; e-mail addresses are unique."""
        user = User.create(id=uuid.uuid4().hex, name=name, email=email, is_admin=is_admin)
        with self._uow_factory() as uow:
            if uow.users.get_by_email(user.email) is not None:
                raise ValidationError(f"User with e-mail '{user.email}' already exists")
            uow.users.save(user)
            uow.commit()
        return to_user_dto(user)
