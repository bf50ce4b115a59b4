# src/chat_geo/api/v1/endpoints/channels.py
"""Channel endpoints for the Chat Geo API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from chat_geo.api.v1.dependencies import ChannelRepoDep, ResolverDep, protected
from chat_geo.schemas.channel import ChannelCreate, ChannelResponse, ChannelUpdate
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.user import UserResponse

router = APIRouter(prefix="/channels", tags=["channels"], dependencies=protected)


@router.get("/")
async def list_channels(channels: ChannelRepoDep) -> dict[str, Any]:
    """List all channels with decoded member sets."""
    return success([dump(ChannelResponse, channel) for channel in channels.list_all()])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_channel(payload: ChannelCreate, channels: ChannelRepoDep) -> dict[str, Any]:
    """Create a Group or Direct Message channel."""
    channel = channels.create(
        name=payload.name,
        user_uuids=payload.user_uuids,
        type=payload.type,
    )
    return success(dump(ChannelResponse, channel))


@router.get("/user/{user_uuid}")
async def list_channels_for_user(user_uuid: str, resolver: ResolverDep) -> dict[str, Any]:
    """List channels whose member set contains the user."""
    return success([dump(ChannelResponse, c) for c in resolver.channels_for_user(user_uuid)])


# Path used by earlier clients.
router.add_api_route(
    "/user_uuid/{user_uuid}",
    list_channels_for_user,
    methods=["GET"],
    include_in_schema=False,
)


@router.get("/{uuid}")
async def get_channel(uuid: str, channels: ChannelRepoDep) -> dict[str, Any]:
    return success(dump(ChannelResponse, channels.get(uuid)))


@router.get("/{uuid}/users")
async def list_channel_members(
    uuid: str,
    channels: ChannelRepoDep,
    resolver: ResolverDep,
) -> dict[str, Any]:
    """List member profiles in membership order; deleted users are skipped."""
    channel = channels.get(uuid)
    return success([dump(UserResponse, user) for user in resolver.members_of(channel)])


@router.put("/{uuid}")
async def update_channel(
    uuid: str,
    payload: ChannelUpdate,
    channels: ChannelRepoDep,
) -> dict[str, Any]:
    """Update any of name, type or member set."""
    channel = channels.update(uuid, payload.model_dump(exclude_unset=True))
    return success(dump(ChannelResponse, channel))


@router.delete("/{uuid}")
async def delete_channel(uuid: str, channels: ChannelRepoDep) -> dict[str, Any]:
    snapshot = channels.delete(uuid)
    return success(snapshot.model_dump(mode="json"), message=f"Channel {uuid} deleted successfully")
