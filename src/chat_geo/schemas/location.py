"""Location-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LocationCreate(BaseModel):
    """Schema for sharing a position with a channel."""

    channel_uuid: str = Field(..., min_length=1)
    user_uuid: str | None = Field(None, min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    weather: str | None = Field(None, description="Optional weather annotation")


class LocationUpdate(BaseModel):
    """Sparse location update."""

    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    weather: str | None = Field(None, min_length=1)


class LocationResponse(BaseModel):
    """Stored location fields."""

    uuid: str
    channel_uuid: str
    user_uuid: str
    latitude: float
    longitude: float
    weather: str | None = None
    created_on: datetime
    modified_on: datetime

    model_config = ConfigDict(from_attributes=True)
