"""Message-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chat_geo.schemas.channel import ChannelWithMembers
from chat_geo.schemas.user import UserResponse


class MessageCreate(BaseModel):
    """Schema for posting a message.

    ``user_uuid`` defaults to the authenticated caller when omitted.
    """

    channel_uuid: str = Field(..., min_length=1)
    user_uuid: str | None = Field(None, min_length=1)
    message: str = Field(..., min_length=1)


class MessageUpdate(BaseModel):
    """Only the body of a message can be edited."""

    message: str | None = Field(None, min_length=1)


class MessageResponse(BaseModel):
    """Stored message fields."""

    uuid: str
    channel_uuid: str
    user_uuid: str
    message: str
    created_on: datetime
    modified_on: datetime

    model_config = ConfigDict(from_attributes=True)


class EnrichedMessage(MessageResponse):
    """Message joined with its author and channel (including member profiles)."""

    user: UserResponse
    channel: ChannelWithMembers
