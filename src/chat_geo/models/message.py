# src/chat_geo/models/message.py
"""Model describing chat messages posted to a channel."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_geo.db.session import Base
from chat_geo.db.time import utcnow


class Message(Base):
    """A chat message authored by one user inside one channel."""

    __tablename__ = "message"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    channel_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("channel.uuid"), nullable=False, index=True
    )
    user_uuid: Mapped[str] = mapped_column(String(36), ForeignKey("user.uuid"), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
