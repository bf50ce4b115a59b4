# src/chat_geo/models/channel.py
"""Models for channels and their member sets.

The member set lives in ``channel.user_uuids`` as a compact JSON array of user
identifiers. ``channel_member`` mirrors it row-per-member so user-scoped lookups
can use an index instead of scanning the serialized text.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_geo.db.session import Base
from chat_geo.db.time import utcnow


class ChannelType(StrEnum):
    """Kinds of channel."""

    GROUP = "Group"
    DIRECT_MESSAGE = "Direct Message"


def normalize_member_set(user_uuids: Iterable[str]) -> list[str]:
    """Drop duplicate ids while keeping first-occurrence order."""
    return list(dict.fromkeys(user_uuids))


def encode_member_set(user_uuids: Iterable[str]) -> str:
    """Serialize a member set to its canonical stored form, e.g. ``["a","b"]``."""
    return json.dumps(normalize_member_set(user_uuids), separators=(",", ":"))


def decode_member_set(raw: str | None) -> list[str]:
    """Parse a stored member set back into a list of ids."""
    if not raw:
        return []
    value = json.loads(raw)
    if not isinstance(value, list):
        raise ValueError("Channel member set must be a JSON array")
    return normalize_member_set(str(item) for item in value)


class Channel(Base):
    """A named conversation between a set of users."""

    __tablename__ = "channel"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    user_uuids: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    modified_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    members: Mapped[list[ChannelMember]] = relationship(
        "ChannelMember",
        back_populates="channel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def member_uuids(self) -> list[str]:
        """Return the decoded member set."""
        return decode_member_set(self.user_uuids)

    def set_members(self, user_uuids: Iterable[str]) -> None:
        """Replace the member set, keeping the serialized column and index rows in sync."""
        ordered = normalize_member_set(user_uuids)
        self.user_uuids = encode_member_set(ordered)
        existing = {member.user_uuid: member for member in self.members}
        self.members = [
            existing.get(user_uuid) or ChannelMember(user_uuid=user_uuid)
            for user_uuid in ordered
        ]


class ChannelMember(Base):
    """Join table mapping users into channels."""

    __tablename__ = "channel_member"

    channel_uuid: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("channel.uuid", ondelete="CASCADE"),
        primary_key=True,
    )
    # No foreign key to user: the member set may name users that were deleted.
    user_uuid: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)

    channel: Mapped[Channel] = relationship("Channel", back_populates="members")
