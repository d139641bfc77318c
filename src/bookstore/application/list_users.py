"""Application service: List Users / Show User use cases (admin queries)."""

from __future__ import annotations

from bookstore.application.authorization import ensure_admin, load_caller
from bookstore.application.dto import UserDTO, to_user_dto
from bookstore.domain.exceptions import UserNotFoundError
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class ListUsersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, caller_id: str) -> list[UserDTO]:
        with self._uow_factory() as uow:
            caller = load_caller(uow, caller_id)
            ensure_admin(caller, "list users")
            users = uow.users.list_all()
        return [to_user_dto(user) for user in users]


class ShowUserHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, caller_id: str, user_id: str) -> UserDTO:
        with self._uow_factory() as uow:
            caller = load_caller(uow, caller_id)
            ensure_admin(caller, "view users")
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
        return to_user_dto(user)
