"""User — the identity behind a request.

Only what order authorization needs is modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import ValidationError


@dataclass
class User:

    id: str
    name: str
    email: str
    is_admin: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(id: str, name: str, email: str, is_admin: bool = False) -> User:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid e-mail address: {email!r}")
        return User(id=id, name=name.strip(), email=email.strip().lower(), is_admin=is_admin)

    def owns(self, owner_id: str) -> bool:
        return self.id == owner_id

    def may_manage(self, owner_id: str) -> bool:
        """Admins manage every order, customers only their own."""
        return self.is_admin or self.owns(owner_id)
