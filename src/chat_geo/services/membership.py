"""Channel membership resolution.

Answers "who is in channel X" and "which channels contain user Y". Reads only;
nothing here mutates channels or users.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Literal

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from chat_geo.core.settings import settings
from chat_geo.models import Channel, ChannelMember, User
from chat_geo.repositories import UserRepository
from chat_geo.repositories.base import translate_store_errors

MembershipLookup = Literal["table", "serialized"]


def quoted_member_needle(user_uuid: str) -> str:
    """Return ``user_uuid`` exactly as it appears inside a stored member set.

    Matching on the quoted form keeps ``abc-1`` from matching ``abc-10``.
    """
    return json.dumps(user_uuid)


class ChannelMembershipResolver:
    """Resolve channel members and user channels against the relational store.

    Two strategies answer user-scoped lookups:

    - ``table``: exact match on the indexed ``channel_member`` rows.
    - ``serialized``: substring match of the quoted id over the stored JSON text
      of ``channel.user_uuids``; correct only while every writer uses the
      canonical codec in :mod:`chat_geo.models.channel`.
    """

    def __init__(self, session: Session, lookup: MembershipLookup | None = None) -> None:
        self.session = session
        self.lookup: MembershipLookup = lookup or settings.membership_lookup
        self.users = UserRepository(session)

    @staticmethod
    def members_from_profiles(channel: Channel, profiles: Mapping[str, User]) -> list[User]:
        """Zip the channel's member order onto already fetched profiles.

        Members whose profile is missing (deleted users) are dropped.
        """
        return [profiles[uuid] for uuid in channel.member_uuids if uuid in profiles]

    def members_for_channels(self, channels: Iterable[Channel]) -> dict[str, list[User]]:
        """Resolve member profiles for many channels with a single user query."""
        channels = list(channels)
        wanted = {uuid for channel in channels for uuid in channel.member_uuids}
        profiles = self.users.get_many(wanted)
        return {channel.uuid: self.members_from_profiles(channel, profiles) for channel in channels}

    def members_of(self, channel: Channel) -> list[User]:
        """Return the member profiles of ``channel`` in membership order."""
        return self.members_for_channels([channel])[channel.uuid]

    def channels_for_user(self, user_uuid: str) -> list[Channel]:
        """Return every channel whose member set contains ``user_uuid``."""
        if self.lookup == "serialized":
            # LIKE ignores ASCII case on SQLite, so candidates are re-checked
            # against the decoded member set.
            stmt = select(Channel).where(
                Channel.user_uuids.contains(quoted_member_needle(user_uuid), autoescape=True)
            )
            with translate_store_errors(self.session, "Channel", "list"):
                candidates = self.session.scalars(stmt.order_by(Channel.created_on))
                return [channel for channel in candidates if user_uuid in channel.member_uuids]
        stmt = (
            select(Channel)
            .join(ChannelMember, ChannelMember.channel_uuid == Channel.uuid)
            .where(ChannelMember.user_uuid == user_uuid)
        )
        with translate_store_errors(self.session, "Channel", "list"):
            return list(self.session.scalars(stmt.order_by(Channel.created_on)))

    def is_member(self, channel_uuid: str, user_uuid: str) -> bool:
        """Return True when ``user_uuid`` belongs to the channel's member set."""
        with translate_store_errors(self.session, "Channel", "read"):
            if self.lookup == "serialized":
                channel = self.session.get(Channel, channel_uuid)
                return channel is not None and user_uuid in channel.member_uuids
            stmt = select(
                exists().where(
                    ChannelMember.channel_uuid == channel_uuid,
                    ChannelMember.user_uuid == user_uuid,
                )
            )
            return bool(self.session.scalar(stmt))
