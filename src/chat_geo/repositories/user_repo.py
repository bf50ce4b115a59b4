"""Data access helpers for users."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select

from chat_geo.core.errors import ConflictError
from chat_geo.models import User
from chat_geo.repositories.base import CrudRepository
from chat_geo.schemas.user import UserResponse

__all__ = ["UserRepository"]


class UserRepository(CrudRepository[User]):
    """Users keyed by uuid with unique username and email."""

    model = User
    entity_name = "User"
    response_schema = UserResponse
    updatable_fields = frozenset({"fullname", "username", "email", "avatar"})
    clearable_fields = frozenset({"avatar"})

    def get_by_username(self, username: str) -> User | None:
        """Return the user with ``username`` or None."""
        with self._translate_errors("read"):
            return self.session.scalars(select(User).where(User.username == username)).first()

    def get_by_email(self, email: str) -> User | None:
        """Return the user with ``email`` or None."""
        with self._translate_errors("read"):
            return self.session.scalars(select(User).where(User.email == email)).first()

    def get_many(self, uuids: Iterable[str]) -> dict[str, User]:
        """Fetch all users in ``uuids`` with a single query, keyed by uuid."""
        wanted = set(uuids)
        if not wanted:
            return {}
        with self._translate_errors("read"):
            rows = self.session.scalars(select(User).where(User.uuid.in_(wanted)))
            return {user.uuid: user for user in rows}

    def _ensure_unique(self, *, email: str | None, username: str | None, exclude: str | None) -> None:
        if email is not None:
            existing = self.get_by_email(email)
            if existing is not None and existing.uuid != exclude:
                raise ConflictError(f"Email {email} already exists")
        if username is not None:
            existing = self.get_by_username(username)
            if existing is not None and existing.uuid != exclude:
                raise ConflictError(f"Username {username} already exists")

    def create(
        self,
        *,
        fullname: str,
        username: str,
        email: str,
        password_hash: str,
        avatar: str | None = None,
    ) -> User:
        """Insert a new user; raise ConflictError if email or username is taken."""
        self._ensure_unique(email=email, username=username, exclude=None)
        user = User(
            fullname=fullname,
            username=username,
            email=email,
            password=password_hash,
            avatar=avatar,
        )
        return self._insert(user)

    def _validate_changes(self, row: User, changes: dict[str, Any]) -> None:
        self._ensure_unique(
            email=changes.get("email"),
            username=changes.get("username"),
            exclude=row.uuid,
        )
