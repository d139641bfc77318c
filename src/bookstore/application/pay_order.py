"""Application service: Pay Order use case.

Marks an order as paid exactly once.  Under the reserve-on-payment
stock policy this is also where stock is taken, in the same unit of
work as the state change.
"""

from __future__ import annotations

import logging

from bookstore.application.authorization import ensure_may_manage, load_caller
from bookstore.application.dto import OrderDTO, PaymentSpec, to_order_dto
from bookstore.domain.exceptions import AlreadyPaidError, OrderNotFoundError
from bookstore.domain.model.order import StockPolicy
from bookstore.domain.model.value_objects import PaymentResult
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory
from bookstore.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class PayOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        stock_policy: StockPolicy = StockPolicy.RESERVE_ON_CREATE,
    ) -> None:
        self._uow_factory = uow_factory
        self._stock_policy = stock_policy

    def handle(self, caller_id: str, order_id: int, payment: PaymentSpec) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            caller = load_caller(uow, caller_id)
            ensure_may_manage(caller, order, "pay for")

            # Fast path; the conditional write below is what settles a race.
            if order.is_paid:
                raise AlreadyPaidError(order.id)

            order.mark_paid(
                PaymentResult(
                    id=payment.id,
                    status=payment.status,
                    update_time=payment.update_time,
                    email_address=payment.email_address,
                )
            )

            # First write of the unit of work: of two concurrent payments only
            # one flips the stored flag, so only one goes on to take stock.
            if not uow.orders.mark_paid_if_unpaid(order):
                raise AlreadyPaidError(order.id)

            if self._stock_policy is StockPolicy.RESERVE_ON_PAYMENT:
                InventoryReservationService(uow).reserve_for_order(order)
            uow.commit()

        logger.info("Order #%s paid by user %s", order_id, caller_id)
        return to_order_dto(order)
