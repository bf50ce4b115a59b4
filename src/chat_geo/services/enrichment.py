"""Read-time joins that attach channel and author data to messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from chat_geo.core.errors import NotFoundError
from chat_geo.models import Channel, Message
from chat_geo.repositories.base import translate_store_errors
from chat_geo.schemas.channel import ChannelWithMembers
from chat_geo.schemas.message import EnrichedMessage
from chat_geo.schemas.user import UserResponse
from chat_geo.services.membership import ChannelMembershipResolver


class MessageEnricher:
    """Build the composite message view with a fixed number of queries.

    However many messages are passed in, enrichment issues one query for their
    channels and one for every user involved (authors and channel members).
    """

    def __init__(self, session: Session, resolver: ChannelMembershipResolver | None = None) -> None:
        self.session = session
        self.resolver = resolver or ChannelMembershipResolver(session)

    def _load_channels(self, channel_uuids: set[str]) -> dict[str, Channel]:
        with translate_store_errors(self.session, "Channel", "read"):
            rows = self.session.scalars(select(Channel).where(Channel.uuid.in_(channel_uuids)))
            return {channel.uuid: channel for channel in rows}

    def enrich(self, messages: Sequence[Message]) -> list[EnrichedMessage]:
        """Return enriched views in the order given.

        Raises:
            NotFoundError: If a message's channel or author no longer exists.
        """
        if not messages:
            return []

        channels = self._load_channels({message.channel_uuid for message in messages})
        for message in messages:
            if message.channel_uuid not in channels:
                raise NotFoundError(
                    f"Channel {message.channel_uuid} for message {message.uuid} not found"
                )

        wanted = {message.user_uuid for message in messages}
        for channel in channels.values():
            wanted.update(channel.member_uuids)
        profiles = self.resolver.users.get_many(wanted)

        channel_views: dict[str, ChannelWithMembers] = {}
        for channel in channels.values():
            view = ChannelWithMembers.model_validate(channel)
            view.users = [
                UserResponse.model_validate(user)
                for user in self.resolver.members_from_profiles(channel, profiles)
            ]
            channel_views[channel.uuid] = view

        enriched: list[EnrichedMessage] = []
        for message in messages:
            author = profiles.get(message.user_uuid)
            if author is None:
                raise NotFoundError(f"Author {message.user_uuid} for message {message.uuid} not found")
            enriched.append(
                EnrichedMessage(
                    uuid=message.uuid,
                    channel_uuid=message.channel_uuid,
                    user_uuid=message.user_uuid,
                    message=message.message,
                    created_on=message.created_on,
                    modified_on=message.modified_on,
                    user=UserResponse.model_validate(author),
                    channel=channel_views[message.channel_uuid],
                )
            )
        return enriched

    def enrich_one(self, message: Message) -> EnrichedMessage:
        """Return the enriched view of a single message."""
        return self.enrich([message])[0]
