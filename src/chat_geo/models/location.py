# src/chat_geo/models/location.py
"""Model describing position broadcasts shared in a channel."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_geo.db.session import Base
from chat_geo.db.time import utcnow


class Location(Base):
    """A user's position shared with a channel, optionally annotated with weather."""

    __tablename__ = "location"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    channel_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("channel.uuid"), nullable=False, index=True
    )
    user_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("user.uuid"), nullable=False, index=True
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    weather: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
