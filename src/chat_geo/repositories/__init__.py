"""Data access layer: one repository per persisted entity."""

from .base import CrudRepository
from .channel_repo import ChannelRepository
from .friendship_repo import FriendshipRepository
from .location_repo import LocationRepository
from .message_repo import MessageRepository
from .user_repo import UserRepository

__all__ = [
    "CrudRepository",
    "ChannelRepository",
    "FriendshipRepository",
    "LocationRepository",
    "MessageRepository",
    "UserRepository",
]
