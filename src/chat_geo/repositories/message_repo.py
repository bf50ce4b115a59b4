"""Data access helpers for chat messages."""
from __future__ import annotations

from sqlalchemy import select

from chat_geo.core.errors import NotFoundError
from chat_geo.models import Channel, Message, User
from chat_geo.repositories.base import CrudRepository
from chat_geo.schemas.message import MessageResponse

__all__ = ["MessageRepository"]


class MessageRepository(CrudRepository[Message]):
    """Messages belonging to exactly one channel and one author."""

    model = Message
    entity_name = "Message"
    response_schema = MessageResponse
    updatable_fields = frozenset({"message"})

    def create(self, *, channel_uuid: str, user_uuid: str, message: str) -> Message:
        """Insert a message after checking that its channel and author exist."""
        with self._translate_errors("create"):
            if self.session.get(Channel, channel_uuid) is None:
                raise NotFoundError(f"Channel {channel_uuid} not found")
            if self.session.get(User, user_uuid) is None:
                raise NotFoundError(f"User {user_uuid} not found")
        row = Message(channel_uuid=channel_uuid, user_uuid=user_uuid, message=message)
        return self._insert(row)

    def list_for_channel(self, channel_uuid: str) -> list[Message]:
        """Return a channel's messages, oldest first."""
        with self._translate_errors("list"):
            stmt = self._oldest_first(select(Message).where(Message.channel_uuid == channel_uuid))
            return list(self.session.scalars(stmt))
