# src/chat_geo/models/__init__.py
"""SQLAlchemy models for the Chat Geo application."""

from .channel import Channel, ChannelMember, ChannelType
from .friendship import Friendship, FriendshipStatus
from .location import Location
from .message import Message
from .user import User

__all__ = [
    "Channel", "ChannelMember", "ChannelType",
    "Friendship", "FriendshipStatus",
    "Location",
    "Message",
    "User",
]
