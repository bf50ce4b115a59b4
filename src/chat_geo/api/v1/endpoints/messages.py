# src/chat_geo/api/v1/endpoints/messages.py
"""Chat message endpoints for the Chat Geo API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from chat_geo.api.v1.dependencies import (
    EnricherDep,
    IdentityDep,
    MessageRepoDep,
    RoomRegistryDep,
    protected,
)
from chat_geo.core.errors import InvalidArgumentError
from chat_geo.core.settings import settings
from chat_geo.realtime import events
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.message import MessageCreate, MessageResponse, MessageUpdate

router = APIRouter(prefix="/messages", tags=["messages"], dependencies=protected)


@router.get("/")
async def list_messages(messages: MessageRepoDep, enricher: EnricherDep) -> dict[str, Any]:
    """List every message with its author and channel attached."""
    enriched = enricher.enrich(messages.list_all())
    return success([item.model_dump(mode="json") for item in enriched])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: MessageCreate,
    identity: IdentityDep,
    messages: MessageRepoDep,
    rooms: RoomRegistryDep,
) -> dict[str, Any]:
    """Persist a message, then echo it to the channel's room."""
    author = payload.user_uuid or identity
    if author is None:
        raise InvalidArgumentError("user_uuid is required")
    message = messages.create(
        channel_uuid=payload.channel_uuid,
        user_uuid=author,
        message=payload.message,
    )
    data = dump(MessageResponse, message)
    if settings.echo_rest_writes:
        rooms.broadcast(message.channel_uuid, events.MESSAGE, data)
    return success(data)


@router.get("/channel_uuid/{channel_uuid}")
async def list_channel_messages(
    channel_uuid: str,
    messages: MessageRepoDep,
    enricher: EnricherDep,
) -> dict[str, Any]:
    """List a channel's messages, oldest first, enriched."""
    enriched = enricher.enrich(messages.list_for_channel(channel_uuid))
    return success([item.model_dump(mode="json") for item in enriched])


@router.get("/{uuid}")
async def get_message(uuid: str, messages: MessageRepoDep, enricher: EnricherDep) -> dict[str, Any]:
    return success(enricher.enrich_one(messages.get(uuid)).model_dump(mode="json"))


@router.put("/{uuid}")
async def update_message(
    uuid: str,
    payload: MessageUpdate,
    messages: MessageRepoDep,
) -> dict[str, Any]:
    """Edit a message body."""
    message = messages.update(uuid, payload.model_dump(exclude_unset=True))
    return success(dump(MessageResponse, message))


@router.delete("/{uuid}")
async def delete_message(uuid: str, messages: MessageRepoDep) -> dict[str, Any]:
    snapshot = messages.delete(uuid)
    return success(snapshot.model_dump(mode="json"), message=f"Message {uuid} deleted successfully")
