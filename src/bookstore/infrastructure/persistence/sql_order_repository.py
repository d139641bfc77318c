"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Column, Select, false, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from bookstore.domain.model.order import Order, OrderLineItem
from bookstore.domain.model.value_objects import (
    Money,
    PaymentResult,
    Quantity,
    ShippingAddress,
)
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.tables import order_items, orders

_PAYMENT_COLUMNS = (
    "is_paid",
    "paid_at",
    "payment_id",
    "payment_status",
    "payment_update_time",
    "payment_email_address",
    "updated_at",
)
_DELIVERY_COLUMNS = ("is_delivered", "delivered_at", "tracking_number", "updated_at")


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        found = self._load(select(orders).where(orders.c.id == order_id))
        return found[0] if found else None

    def list_all(self) -> list[Order]:
        return self._load(select(orders).order_by(orders.c.id))

    def list_by_user(self, user_id: str) -> list[Order]:
        return self._load(
            select(orders).where(orders.c.user_id == user_id).order_by(orders.c.id)
        )

    def references_book(self, book_id: str) -> bool:
        found = self._conn.execute(
            select(order_items.c.order_id).where(order_items.c.book_id == book_id).limit(1)
        ).first()
        return found is not None

    def save(self, order: Order) -> None:
        if order.id is not None:
            raise ValueError(f"Order #{order.id} is already stored")
        result = self._conn.execute(insert(orders).values(**self._to_raw(order)))
        order.id = result.inserted_primary_key[0]
        self._conn.execute(
            insert(order_items),
            [
                {
                    "order_id": order.id,
                    "position": position,
                    "book_id": item.book_id,
                    "title": item.title,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.to_raw(),
                }
                for position, item in enumerate(order.items)
            ],
        )

    def mark_paid_if_unpaid(self, order: Order) -> bool:
        return self._transition(order, orders.c.is_paid, _PAYMENT_COLUMNS)

    def mark_delivered_if_undelivered(self, order: Order) -> bool:
        return self._transition(order, orders.c.is_delivered, _DELIVERY_COLUMNS)

    def _transition(self, order: Order, flag: Column, columns: tuple[str, ...]) -> bool:
        # The flag is checked by the UPDATE itself, so of two concurrent
        # callers exactly one sees a matched row.
        raw = self._to_raw(order)
        result = self._conn.execute(
            update(orders)
            .where(orders.c.id == order.id, flag == false())
            .values(**{name: raw[name] for name in columns})
        )
        return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        payment = order.payment_result
        address = order.shipping_address
        return {
            "user_id": order.user_id,
            "shipping_address": address.address,
            "shipping_city": address.city,
            "shipping_postal_code": address.postal_code,
            "shipping_country": address.country,
            "payment_method": order.payment_method,
            "items_price": order.items_price.to_raw(),
            "shipping_price": order.shipping_price.to_raw(),
            "tax_price": order.tax_price.to_raw(),
            "total_price": order.total_price.to_raw(),
            "is_paid": order.is_paid,
            "paid_at": _iso(order.paid_at),
            "payment_id": payment.id if payment else None,
            "payment_status": payment.status if payment else None,
            "payment_update_time": payment.update_time if payment else None,
            "payment_email_address": payment.email_address if payment else None,
            "is_delivered": order.is_delivered,
            "delivered_at": _iso(order.delivered_at),
            "tracking_number": order.tracking_number,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(row: RowMapping, items: list[OrderLineItem]) -> Order:
        payment = None
        if row["payment_id"] is not None or row["payment_status"] is not None:
            payment = PaymentResult(
                id=row["payment_id"] or "",
                status=row["payment_status"] or "",
                update_time=row["payment_update_time"] or "",
                email_address=row["payment_email_address"] or "",
            )
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            items=tuple(items),
            shipping_address=ShippingAddress(
                address=row["shipping_address"],
                city=row["shipping_city"],
                postal_code=row["shipping_postal_code"],
                country=row["shipping_country"],
            ),
            payment_method=row["payment_method"],
            shipping_price=Money(Decimal(row["shipping_price"])),
            tax_price=Money(Decimal(row["tax_price"])),
            is_paid=bool(row["is_paid"]),
            paid_at=_parse(row["paid_at"]),
            payment_result=payment,
            is_delivered=bool(row["is_delivered"]),
            delivered_at=_parse(row["delivered_at"]),
            tracking_number=row["tracking_number"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    # --- Query helpers --------------------------------------------------------

    def _load(self, query: Select) -> list[Order]:
        rows = list(self._conn.execute(query).mappings())
        if not rows:
            return []

        items_by_order: dict[int, list[OrderLineItem]] = {row["id"]: [] for row in rows}
        item_rows = self._conn.execute(
            select(order_items)
            .where(order_items.c.order_id.in_(list(items_by_order)))
            .order_by(order_items.c.order_id, order_items.c.position)
        ).mappings()
        for raw in item_rows:
            items_by_order[raw["order_id"]].append(
                OrderLineItem(
                    book_id=raw["book_id"],
                    title=raw["title"],
                    quantity=Quantity(raw["quantity"]),
                    unit_price=Money(Decimal(raw["unit_price"])),
                )
            )

        return [self._to_domain(row, items_by_order[row["id"]]) for row in rows]


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def _parse(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw is not None else None
