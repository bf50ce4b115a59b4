# src/chat_geo/api/v1/endpoints/auth.py
"""Authentication endpoints for the Chat Geo API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status

from chat_geo.api.v1.dependencies import TokenClaimsDep, UserRepoDep
from chat_geo.core.security import create_access_token, hash_password, verify_password
from chat_geo.schemas.common import dump, success
from chat_geo.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, users: UserRepoDep) -> dict[str, Any]:
    """Create an account. Email and username must both be unused."""
    user = users.create(
        fullname=payload.fullname,
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        avatar=payload.avatar,
    )
    logger.info("Registered user %s", user.uuid)
    return success(dump(UserResponse, user))


@router.post("/login")
async def login(payload: LoginRequest, users: UserRepoDep) -> dict[str, Any]:
    """Exchange a username and password for a bearer token."""
    user = users.get_by_username(payload.username)
    if user is None or not verify_password(payload.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    token = create_access_token(user.uuid, username=user.username, email=user.email)
    body = LoginResponse(token=token, user=UserResponse.model_validate(user))
    return success(body.model_dump(mode="json"))


@router.get("/validate-token")
async def validate_token(claims: TokenClaimsDep) -> dict[str, Any]:
    """Confirm that the presented token is valid and echo its identity claims."""
    identity = {key: claims[key] for key in ("sub", "username", "email") if key in claims}
    return success(identity, message="Token is valid")
