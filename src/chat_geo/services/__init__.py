# src/chat_geo/services/__init__.py
"""Business logic services for the Chat Geo application."""

from .enrichment import MessageEnricher
from .membership import ChannelMembershipResolver

__all__ = [
    "ChannelMembershipResolver",
    "MessageEnricher",
]
