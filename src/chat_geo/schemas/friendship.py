"""Friendship-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chat_geo.models.friendship import FriendshipStatus


class FriendshipCreate(BaseModel):
    """Schema for recording a friendship between two users."""

    user1_uuid: str = Field(..., min_length=1)
    user2_uuid: str = Field(..., min_length=1)
    status: FriendshipStatus = FriendshipStatus.PENDING

    @model_validator(mode="after")
    def check_distinct_users(self) -> "FriendshipCreate":
        """A user cannot befriend themselves."""
        if self.user1_uuid == self.user2_uuid:
            raise ValueError("user1_uuid and user2_uuid must differ")
        return self


class FriendshipUpdate(BaseModel):
    """Only the status of a friendship can change."""

    status: FriendshipStatus | None = None


class FriendshipResponse(BaseModel):
    """Stored friendship fields."""

    uuid: str
    user1_uuid: str
    user2_uuid: str
    status: str
    created_on: datetime
    modified_on: datetime

    model_config = ConfigDict(from_attributes=True)
