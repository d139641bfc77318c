"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from bookstore.domain.model.user import User
from bookstore.domain.repository.user_repository import UserRepository
from bookstore.infrastructure.persistence.tables import users


class SqlUserRepository(UserRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, user_id: str) -> User | None:
        row = self._conn.execute(select(users).where(users.c.id == user_id)).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        row = self._conn.execute(
            select(users).where(func.lower(users.c.email) == email.strip().lower())
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[User]:
        rows = self._conn.execute(select(users).order_by(users.c.created_at, users.c.id)).mappings()
        return [self._to_domain(row) for row in rows]

    def save(self, user: User) -> None:
        raw = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "is_admin": user.is_admin,
            "created_at": user.created_at.isoformat(),
        }
        result = self._conn.execute(update(users).where(users.c.id == user.id).values(**raw))
        if result.rowcount == 0:
            self._conn.execute(insert(users).values(**raw))

    @staticmethod
    def _to_domain(row: RowMapping) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            is_admin=bool(row["is_admin"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
