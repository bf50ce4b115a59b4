# src/chat_geo/models/friendship.py
"""Model for friendship records between two users."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from chat_geo.db.session import Base
from chat_geo.db.time import utcnow


class FriendshipStatus(StrEnum):
    """Lifecycle states of a friendship."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    BLOCKED = "Blocked"


class Friendship(Base):
    """Relationship between two users."""

    __tablename__ = "friendship"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user1_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("user.uuid"), nullable=False, index=True
    )
    user2_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("user.uuid"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=FriendshipStatus.PENDING.value
    )
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
