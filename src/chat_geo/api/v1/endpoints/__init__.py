# src/chat_geo/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .channels import router as channels_router
from .friendships import router as friendships_router
from .locations import router as locations_router
from .messages import router as messages_router
from .realtime import router as realtime_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "channels_router",
    "messages_router",
    "locations_router",
    "friendships_router",
    "realtime_router",
    "system_router",
]
