# src/chat_geo/api/v1/__init__.py
"""Version 1 API endpoints."""

from fastapi import FastAPI

from .endpoints import (
    auth_router,
    channels_router,
    friendships_router,
    locations_router,
    messages_router,
    realtime_router,
    system_router,
    users_router,
)

API_PREFIX = "/api/v1"

routers = (
    auth_router,
    users_router,
    channels_router,
    messages_router,
    locations_router,
    friendships_router,
    realtime_router,
    system_router,
)


def include_routers(app: FastAPI) -> None:
    """Mount every v1 router under ``API_PREFIX``.

    The mounted (prefix, router) pairs are kept on ``app.state`` so the route
    listing does not depend on how FastAPI stores included routers.
    """
    for router in routers:
        app.include_router(router, prefix=API_PREFIX)
    app.state.mounted_routers = [(API_PREFIX, router) for router in routers]


__all__ = [
    "API_PREFIX",
    "include_routers",
    "routers",
    "auth_router",
    "users_router",
    "channels_router",
    "messages_router",
    "locations_router",
    "friendships_router",
    "realtime_router",
    "system_router",
]
