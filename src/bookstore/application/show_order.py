"""Application service: Show Order use case (query)."""

from __future__ import annotations

from bookstore.application.authorization import ensure_may_manage, load_caller
from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import OrderNotFoundError
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, caller_id: str, order_id: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            caller = load_caller(uow, caller_id)
            ensure_may_manage(caller, order, "view")
        return to_order_dto(order)
