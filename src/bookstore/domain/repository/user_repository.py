"""Abstract repository for User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by (case-insensitive) e-mail, or None."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user, oldest first."""
