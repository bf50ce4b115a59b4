"""Data access helpers for channels and their member sets."""
from __future__ import annotations

from typing import Any

from chat_geo.core.errors import InvalidArgumentError
from chat_geo.models import Channel, ChannelType
from chat_geo.repositories.base import CrudRepository
from chat_geo.schemas.channel import ChannelResponse

__all__ = ["ChannelRepository"]

DIRECT_MESSAGE_MEMBER_COUNT = 2


def _check_member_set(channel_type: str, user_uuids: list[str]) -> None:
    if not user_uuids:
        raise InvalidArgumentError("A channel needs at least one member")
    if channel_type == ChannelType.DIRECT_MESSAGE and len(user_uuids) != DIRECT_MESSAGE_MEMBER_COUNT:
        raise InvalidArgumentError("A Direct Message channel must have exactly two members")


class ChannelRepository(CrudRepository[Channel]):
    """Channels with a serialized member set mirrored into ``channel_member``."""

    model = Channel
    entity_name = "Channel"
    response_schema = ChannelResponse
    updatable_fields = frozenset({"name", "type", "user_uuids"})

    def create(self, *, name: str, user_uuids: list[str], type: str) -> Channel:
        """Insert a channel with the given members."""
        channel_type = ChannelType(type)
        _check_member_set(channel_type, list(dict.fromkeys(user_uuids)))
        channel = Channel(name=name, type=channel_type.value)
        channel.set_members(user_uuids)
        return self._insert(channel)

    def _validate_changes(self, row: Channel, changes: dict[str, Any]) -> None:
        channel_type = ChannelType(changes.get("type", row.type))
        members = changes.get("user_uuids", row.member_uuids)
        _check_member_set(channel_type, list(dict.fromkeys(members)))

    def _apply_changes(self, row: Channel, changes: dict[str, Any]) -> None:
        if "name" in changes:
            row.name = changes["name"]
        if "type" in changes:
            row.type = ChannelType(changes["type"]).value
        if "user_uuids" in changes:
            row.set_members(changes["user_uuids"])
