# src/chat_geo/models/user.py
"""SQLAlchemy model for registered users."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_geo.db.session import Base
from chat_geo.db.time import utcnow


class User(Base):
    """A registered account; ``password`` holds the credential hash only."""

    __tablename__ = "user"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    fullname: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
