# src/chat_geo/api/v1/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from chat_geo.api.v1.dependencies import UserRepoDep, protected
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.user import UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"], dependencies=protected)


@router.get("/")
async def list_users(users: UserRepoDep) -> dict[str, Any]:
    """List all users without their credential hashes."""
    return success([dump(UserResponse, user) for user in users.list_all()])


@router.get("/{uuid}")
async def get_user(uuid: str, users: UserRepoDep) -> dict[str, Any]:
    return success(dump(UserResponse, users.get(uuid)))


@router.put("/{uuid}")
async def update_user(uuid: str, payload: UserUpdate, users: UserRepoDep) -> dict[str, Any]:
    """Update any of fullname, username, email or avatar."""
    user = users.update(uuid, payload.model_dump(exclude_unset=True))
    return success(dump(UserResponse, user))


@router.delete("/{uuid}")
async def delete_user(uuid: str, users: UserRepoDep) -> dict[str, Any]:
    snapshot = users.delete(uuid)
    return success(snapshot.model_dump(mode="json"), message=f"User {uuid} deleted successfully")
