"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model:
validate the draft, snapshot the books, and (under the default stock
policy) reserve stock and persist the order in one unit of work.
"""

from __future__ import annotations

import logging

from bookstore.application.authorization import load_caller
from bookstore.application.dto import OrderDTO, OrderItemSpec, ShippingSpec, to_order_dto
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order, OrderDraft, StockPolicy
from bookstore.domain.model.value_objects import Money, ShippingAddress
from bookstore.domain.repository.unit_of_work import UnitOfWorkFactory
from bookstore.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        stock_policy: StockPolicy = StockPolicy.RESERVE_ON_CREATE,
    ) -> None:
        self._uow_factory = uow_factory
        self._stock_policy = stock_policy

    def handle(
        self,
        caller_id: str,
        item_specs: list[OrderItemSpec],
        shipping: ShippingSpec,
        payment_method: str,
        shipping_price: str = "0",
        tax_price: str = "0",
    ) -> OrderDTO:
        """Create a new order for the caller.

        Steps:
        1. Validate the draft (no store is touched if this fails).
        2. Resolve each book ID to a Book (fail if not found).
        3. Build the Order with *current* titles and prices (snapshot).
        4. Reserve stock if the policy says so, persist, commit.
        """
        draft = OrderDraft.create(
            user_id=caller_id,
            items=[(spec.book_id, spec.quantity) for spec in item_specs],
            shipping_address=ShippingAddress(
                address=shipping.address,
                city=shipping.city,
                postal_code=shipping.postal_code,
                country=shipping.country,
            ),
            payment_method=payment_method,
            shipping_price=Money.of(shipping_price),
            tax_price=Money.of(tax_price),
        )

        with self._uow_factory() as uow:
            load_caller(uow, caller_id)

            books: dict[str, Book] = {}
            for line in draft.lines:
                if line.book_id in books:
                    continue
                book = uow.books.get_by_id(line.book_id)
                if book is None:
                    raise BookNotFoundError(line.book_id)
                books[book.id] = book

            order = Order.place(draft, books)

            if self._stock_policy is StockPolicy.RESERVE_ON_CREATE:
                InventoryReservationService(uow).reserve_and_save(order)
            else:
                uow.orders.save(order)
                uow.commit()

        logger.info(
            "Order #%s created for user %s (%d lines, total %s)",
            order.id, caller_id, len(order.items), order.total_price,
        )
        return to_order_dto(order)
