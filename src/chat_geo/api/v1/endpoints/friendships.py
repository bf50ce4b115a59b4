# src/chat_geo/api/v1/endpoints/friendships.py
"""Friendship endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from chat_geo.api.v1.dependencies import FriendshipRepoDep, protected
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.friendship import FriendshipCreate, FriendshipResponse, FriendshipUpdate

router = APIRouter(prefix="/friendships", tags=["friendships"], dependencies=protected)


@router.get("/")
async def list_friendships(friendships: FriendshipRepoDep) -> dict[str, Any]:
    return success([dump(FriendshipResponse, row) for row in friendships.list_all()])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_friendship(
    payload: FriendshipCreate,
    friendships: FriendshipRepoDep,
) -> dict[str, Any]:
    friendship = friendships.create(
        user1_uuid=payload.user1_uuid,
        user2_uuid=payload.user2_uuid,
        status=payload.status,
    )
    return success(dump(FriendshipResponse, friendship))


@router.get("/user_uuid/{user_uuid}")
async def list_user_friendships(user_uuid: str, friendships: FriendshipRepoDep) -> dict[str, Any]:
    """List friendships where the user is on either side."""
    rows = friendships.list_for_user(user_uuid)
    return success([dump(FriendshipResponse, row) for row in rows])


@router.get("/{uuid}")
async def get_friendship(uuid: str, friendships: FriendshipRepoDep) -> dict[str, Any]:
    return success(dump(FriendshipResponse, friendships.get(uuid)))


@router.put("/{uuid}")
async def update_friendship(
    uuid: str,
    payload: FriendshipUpdate,
    friendships: FriendshipRepoDep,
) -> dict[str, Any]:
    """Change the friendship status."""
    friendship = friendships.update(uuid, payload.model_dump(exclude_unset=True))
    return success(dump(FriendshipResponse, friendship))


@router.delete("/{uuid}")
async def delete_friendship(uuid: str, friendships: FriendshipRepoDep) -> dict[str, Any]:
    snapshot = friendships.delete(uuid)
    return success(
        snapshot.model_dump(mode="json"),
        message=f"Friendship {uuid} deleted successfully",
    )
