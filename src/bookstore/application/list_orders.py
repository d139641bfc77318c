"""Application service: List Orders use cases (queries)."""

from __future__ import annotations

from bookstore.application.authorization import ensure_admin, load_caller
from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class ListOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle_mine(self, caller_id: str) -> list[OrderDTO]:
        """Orders placed by the caller."""
        with self._uow_factory() as uow:
            load_caller(uow, caller_id)
            orders = uow.orders.list_by_user(caller_id)
        return [to_order_dto(order) for order in orders]

    def handle_all(self, caller_id: str) -> list[OrderDTO]:
        """Every order in the store; admins only."""
        with self._uow_factory() as uow:
            caller = load_caller(uow, caller_id)
            ensure_admin(caller, "list all orders")
            orders = uow.orders.list_all()
        return [to_order_dto(order) for order in orders]
