# src/chat_geo/api/v1/endpoints/locations.py
"""Location sharing endpoints for the Chat Geo API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from chat_geo.api.v1.dependencies import (
    IdentityDep,
    LocationRepoDep,
    RoomRegistryDep,
    protected,
)
from chat_geo.core.errors import InvalidArgumentError
from chat_geo.core.settings import settings
from chat_geo.realtime import events
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.location import LocationCreate, LocationResponse, LocationUpdate

router = APIRouter(prefix="/locations", tags=["locations"], dependencies=protected)


@router.get("/")
async def list_locations(locations: LocationRepoDep) -> dict[str, Any]:
    return success([dump(LocationResponse, row) for row in locations.list_all()])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_location(
    payload: LocationCreate,
    identity: IdentityDep,
    locations: LocationRepoDep,
    rooms: RoomRegistryDep,
) -> dict[str, Any]:
    """Persist a position, then echo it to the channel's room."""
    author = payload.user_uuid or identity
    if author is None:
        raise InvalidArgumentError("user_uuid is required")
    location = locations.create(
        channel_uuid=payload.channel_uuid,
        user_uuid=author,
        latitude=payload.latitude,
        longitude=payload.longitude,
        weather=payload.weather,
    )
    data = dump(LocationResponse, location)
    if settings.echo_rest_writes:
        rooms.broadcast(location.channel_uuid, events.LOCATION, data)
    return success(data)


@router.get("/channel_uuid/{channel_uuid}")
async def list_channel_locations(channel_uuid: str, locations: LocationRepoDep) -> dict[str, Any]:
    rows = locations.list_for_channel(channel_uuid)
    return success([dump(LocationResponse, row) for row in rows])


@router.get("/user_uuid/{user_uuid}")
async def list_user_locations(user_uuid: str, locations: LocationRepoDep) -> dict[str, Any]:
    rows = locations.list_for_user(user_uuid)
    return success([dump(LocationResponse, row) for row in rows])


@router.get("/{uuid}")
async def get_location(uuid: str, locations: LocationRepoDep) -> dict[str, Any]:
    return success(dump(LocationResponse, locations.get(uuid)))


@router.put("/{uuid}")
async def update_location(
    uuid: str,
    payload: LocationUpdate,
    locations: LocationRepoDep,
) -> dict[str, Any]:
    """Update latitude, longitude or weather."""
    location = locations.update(uuid, payload.model_dump(exclude_unset=True))
    return success(dump(LocationResponse, location))


@router.delete("/{uuid}")
async def delete_location(uuid: str, locations: LocationRepoDep) -> dict[str, Any]:
    snapshot = locations.delete(uuid)
    return success(
        snapshot.model_dump(mode="json"),
        message=f"Location {uuid} deleted successfully",
    )
