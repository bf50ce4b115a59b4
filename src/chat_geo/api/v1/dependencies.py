"""Shared API dependencies for authentication and data access."""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from chat_geo.core.security import decode_access_token
from chat_geo.core.settings import settings
from chat_geo.db.session import get_db
from chat_geo.realtime.rooms import RoomRegistry
from chat_geo.repositories import (
    ChannelRepository,
    FriendshipRepository,
    LocationRepository,
    MessageRepository,
    UserRepository,
)
from chat_geo.services.enrichment import MessageEnricher
from chat_geo.services.membership import ChannelMembershipResolver

# HTTP Bearer scheme; missing credentials are reported by the dependency itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def decode_claims(token: str) -> dict[str, Any]:
    """Decode a bearer token into its claims.

    Raises:
        HTTPException: 401 if the token is expired, invalid or has no subject.
    """
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        ) from err
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from err
    if not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return payload


def require_token_claims(credentials: CredentialsDep) -> dict[str, Any]:
    """Return the claims of the presented bearer token; a token is mandatory."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token is required")
    return decode_claims(credentials.credentials)


def get_current_identity(credentials: CredentialsDep) -> str | None:
    """Return the authenticated user's uuid.

    When ``REQUIRE_AUTH`` is off an absent token yields None; a token that is
    present is still verified.
    """
    if credentials is None and not settings.require_auth:
        return None
    return str(require_token_claims(credentials)["sub"])


def get_room_registry(connection: HTTPConnection) -> RoomRegistry:
    """Return the process-wide room registry owned by the application."""
    return connection.app.state.rooms


def get_user_repo(db: SessionDep) -> UserRepository:
    return UserRepository(db)


def get_channel_repo(db: SessionDep) -> ChannelRepository:
    return ChannelRepository(db)


def get_message_repo(db: SessionDep) -> MessageRepository:
    return MessageRepository(db)


def get_location_repo(db: SessionDep) -> LocationRepository:
    return LocationRepository(db)


def get_friendship_repo(db: SessionDep) -> FriendshipRepository:
    return FriendshipRepository(db)


def get_membership_resolver(db: SessionDep) -> ChannelMembershipResolver:
    return ChannelMembershipResolver(db)


def get_message_enricher(
    db: SessionDep,
    resolver: Annotated[ChannelMembershipResolver, Depends(get_membership_resolver)],
) -> MessageEnricher:
    return MessageEnricher(db, resolver)


TokenClaimsDep = Annotated[dict[str, Any], Depends(require_token_claims)]
IdentityDep = Annotated[str | None, Depends(get_current_identity)]
RoomRegistryDep = Annotated[RoomRegistry, Depends(get_room_registry)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]
ChannelRepoDep = Annotated[ChannelRepository, Depends(get_channel_repo)]
MessageRepoDep = Annotated[MessageRepository, Depends(get_message_repo)]
LocationRepoDep = Annotated[LocationRepository, Depends(get_location_repo)]
FriendshipRepoDep = Annotated[FriendshipRepository, Depends(get_friendship_repo)]
ResolverDep = Annotated[ChannelMembershipResolver, Depends(get_membership_resolver)]
EnricherDep = Annotated[MessageEnricher, Depends(get_message_enricher)]

# Router-level guard for protected resources.
protected = [Depends(get_current_identity)]
