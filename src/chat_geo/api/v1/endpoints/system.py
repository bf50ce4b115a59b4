"""System endpoints for Chat Geo API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute, APIWebSocketRoute
from starlette.routing import BaseRoute

from chat_geo.api.v1.dependencies import RoomRegistryDep, protected
from chat_geo.core.settings import settings
from chat_geo.schemas.common import success

router = APIRouter(prefix="/system", tags=["system"])


def _route_entries(route: BaseRoute, prefix: str) -> list[dict[str, str]]:
    if isinstance(route, APIRoute):
        return [{"method": method, "path": prefix + route.path} for method in sorted(route.methods)]
    if isinstance(route, APIWebSocketRoute):
        return [{"method": "WS", "path": prefix + route.path}]
    return []


@router.get("/routes")
async def list_routes(request: Request) -> dict[str, Any]:
    """Return every registered method/path pair.

    WebSocket routes are reported with the method ``WS``. Routes declared on
    the app itself are read from ``app.routes``; versioned routes come from the
    routers recorded when they were mounted.
    """
    sources: list[tuple[str, list[BaseRoute]]] = [("", request.app.routes)]
    for prefix, mounted in getattr(request.app.state, "mounted_routers", []):
        sources.append((prefix, mounted.routes))

    routes: list[dict[str, str]] = []
    seen: set[tuple[str, str]] = set()
    for prefix, candidates in sources:
        for route in candidates:
            for entry in _route_entries(route, prefix):
                key = (entry["method"], entry["path"])
                if key not in seen:
                    seen.add(key)
                    routes.append(entry)
    return success(routes)


@router.get("/config")
async def get_public_config() -> dict[str, Any]:
    """Return a sanitized snapshot of runtime configuration.

    Secrets and connection strings are excluded.
    """
    return success(
        {
            "name": settings.app_name,
            "version": settings.app_version,
            "require_auth": settings.require_auth,
            "room_admission": settings.room_admission,
            "membership_lookup": settings.membership_lookup,
            "echo_rest_writes": settings.echo_rest_writes,
            "access_token_expire_minutes": settings.access_token_expire_minutes,
        }
    )


@router.get("/rooms", dependencies=protected)
async def list_rooms(rooms: RoomRegistryDep) -> dict[str, Any]:
    """Return live rooms and the connection ids joined to each."""
    return success(rooms.snapshot())
