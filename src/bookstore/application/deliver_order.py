"""Application service: Deliver Order use case (admin only).

Payment is not a precondition unless the handler is built with
``require_payment=True``.
"""

from __future__ import annotations

import logging

from bookstore.application.authorization import ensure_admin, load_caller
from bookstore.application.dto import OrderDTO, to_order_dto
from bookstore.domain.exceptions import AlreadyDeliveredError, OrderNotFoundError
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class DeliverOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory, require_payment: bool = False) -> None:
        self._uow_factory = uow_factory
        self._require_payment = require_payment

    def handle(self, caller_id: str, order_id: int, tracking_number: str = "") -> OrderDTO:
        with self._uow_factory() as uow:
            caller = load_caller(uow, caller_id)
            ensure_admin(caller, "deliver orders")

            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            order.mark_delivered(tracking_number, require_paid=self._require_payment)
            if not uow.orders.mark_delivered_if_undelivered(order):
                raise AlreadyDeliveredError(order.id)

            if not order.is_paid:
                logger.warning("Order #%s marked delivered before payment", order_id)
            uow.commit()

        logger.info("Order #%s delivered (tracking %r)", order_id, order.tracking_number)
        return to_order_dto(order)
