"""Channel-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chat_geo.models.channel import ChannelType, decode_member_set, normalize_member_set
from chat_geo.schemas.user import UserResponse

_TYPE_ALIASES = {"directmessage": ChannelType.DIRECT_MESSAGE, "dm": ChannelType.DIRECT_MESSAGE}


def _coerce_channel_type(value: Any) -> Any:
    if isinstance(value, str):
        key = value.replace(" ", "").replace("_", "").lower()
        if key in _TYPE_ALIASES:
            return _TYPE_ALIASES[key]
        if key == "group":
            return ChannelType.GROUP
    return value


def _clean_member_ids(value: list[str] | None) -> list[str] | None:
    if value is None:
        return value
    cleaned = [item.strip() for item in value]
    if any(not item for item in cleaned):
        raise ValueError("user_uuids must not contain empty identifiers")
    return normalize_member_set(cleaned)


class ChannelCreate(BaseModel):
    """Schema for creating a channel."""

    name: str = Field(..., min_length=1, max_length=200)
    user_uuids: list[str] = Field(..., min_length=1, description="Member user identifiers")
    type: ChannelType = Field(..., description="'Group' or 'Direct Message'")

    coerce_type = field_validator("type", mode="before")(_coerce_channel_type)

    @field_validator("user_uuids")
    @classmethod
    def validate_members(cls, v: list[str]) -> list[str]:
        """Strip and de-duplicate member ids."""
        return _clean_member_ids(v)  # type: ignore[return-value]


class ChannelUpdate(BaseModel):
    """Sparse channel update; omitted fields are left untouched."""

    name: str | None = Field(None, min_length=1, max_length=200)
    user_uuids: list[str] | None = Field(None, min_length=1)
    type: ChannelType | None = None

    coerce_type = field_validator("type", mode="before")(_coerce_channel_type)

    @field_validator("user_uuids")
    @classmethod
    def validate_members(cls, v: list[str] | None) -> list[str] | None:
        """Strip and de-duplicate member ids."""
        return _clean_member_ids(v)


class ChannelResponse(BaseModel):
    """Channel as returned by the API, with the member set decoded."""

    uuid: str
    name: str
    user_uuids: list[str]
    type: str
    created_on: datetime
    modified_on: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("user_uuids", mode="before")
    @classmethod
    def decode_members(cls, v: Any) -> Any:
        """Accept the serialized column value as well as a list."""
        if isinstance(v, str):
            return decode_member_set(v)
        return v


class ChannelWithMembers(ChannelResponse):
    """Channel with resolved member profiles."""

    users: list[UserResponse] = Field(default_factory=list)
