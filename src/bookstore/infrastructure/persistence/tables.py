"""SQLAlchemy table definitions.

Money is stored as exact decimal strings and timestamps as ISO-8601
strings so that values round-trip unchanged on every backend.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(200), nullable=False),
    Column("email", String(320), nullable=False, unique=True),
    Column("is_admin", Boolean, nullable=False, default=False),
    Column("created_at", String(40), nullable=False),
)

books = Table(
    "books",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("title", String(500), nullable=False),
    Column("author", String(300), nullable=False),
    Column("isbn", String(32), nullable=False, unique=True),
    Column("genre", String(100), nullable=False),
    Column("price", String(32), nullable=False),
    Column("quantity", Integer, nullable=False, default=0),
    Column("description", Text, nullable=False, default=""),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
    CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(32), ForeignKey("users.id"), nullable=False, index=True),
    Column("shipping_address", String(500), nullable=False),
    Column("shipping_city", String(200), nullable=False),
    Column("shipping_postal_code", String(32), nullable=False),
    Column("shipping_country", String(100), nullable=False),
    Column("payment_method", String(100), nullable=False),
    Column("items_price", String(32), nullable=False),
    Column("shipping_price", String(32), nullable=False),
    Column("tax_price", String(32), nullable=False),
    Column("total_price", String(32), nullable=False),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("paid_at", String(40), nullable=True),
    Column("payment_id", String(200), nullable=True),
    Column("payment_status", String(100), nullable=True),
    Column("payment_update_time", String(100), nullable=True),
    Column("payment_email_address", String(320), nullable=True),
    Column("is_delivered", Boolean, nullable=False, default=False),
    Column("delivered_at", String(40), nullable=True),
    Column("tracking_number", String(200), nullable=True),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
)

order_items = Table(
    "order_items",
    metadata,
    Column("order_id", Integer, ForeignKey("orders.id"), primary_key=True),
    Column("position", Integer, primary_key=True),
    Column("book_id", String(32), ForeignKey("books.id"), nullable=False, index=True),
    Column("title", String(500), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", String(32), nullable=False),
    CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
)
