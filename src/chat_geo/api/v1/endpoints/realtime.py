# src/chat_geo/api/v1/endpoints/realtime.py
"""WebSocket endpoint for channel rooms."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, WebSocket, status
from jose import JWTError
from pydantic import ValidationError

from chat_geo.api.v1.dependencies import RoomRegistryDep, SessionDep
from chat_geo.core.errors import StoreError
from chat_geo.core.security import decode_access_token
from chat_geo.core.settings import settings
from chat_geo.realtime import events
from chat_geo.realtime.connection import Connection
from chat_geo.realtime.rooms import RoomRegistry
from chat_geo.services.membership import ChannelMembershipResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def _identity_from_token(token: str | None) -> tuple[bool, str | None]:
    """Return ``(accepted, identity)`` for the token presented on connect."""
    if token is None:
        return not settings.require_auth, None
    try:
        claims = decode_access_token(token)
    except JWTError:
        return False, None
    subject = claims.get("sub")
    return bool(subject), str(subject) if subject else None


class SocketSession:
    """Dispatches frames from one connection onto the room registry."""

    def __init__(
        self,
        connection: Connection,
        rooms: RoomRegistry,
        resolver: ChannelMembershipResolver,
    ) -> None:
        self.connection = connection
        self.rooms = rooms
        self.resolver = resolver

    def reject(self, event: str, message: str) -> None:
        self.connection.send(events.frame(events.ERROR, {"event": event, "message": message}))

    def handle(self, raw: str | bytes) -> None:
        """Parse and dispatch a single frame.

        Binary frames are accepted when they carry UTF-8 JSON.
        """
        try:
            incoming = events.ClientFrame.model_validate_json(raw)
        except ValidationError:
            self.reject("", "Frames must be JSON objects with an 'event' field")
            return

        channel_id = events.channel_id_from(incoming.data)
        if incoming.event == events.JOIN_CHANNEL:
            self.join(channel_id)
        elif incoming.event == events.LEAVE_CHANNEL:
            if channel_id is None:
                self.reject(incoming.event, "channel_uuid is required")
                return
            self.rooms.leave(self.connection, channel_id)
        elif incoming.event in events.ROOM_EVENTS:
            self.relay(incoming.event, channel_id, incoming.data)
        else:
            self.reject(incoming.event, f"Unknown event '{incoming.event}'")

    def join(self, channel_id: str | None) -> None:
        if channel_id is None:
            self.reject(events.JOIN_CHANNEL, "channel_uuid is required")
            return
        if settings.room_admission == "members" and not self.admits(channel_id):
            self.reject(events.JOIN_CHANNEL, f"Not a member of channel {channel_id}")
            return
        self.rooms.join(self.connection, channel_id)

    def admits(self, channel_id: str) -> bool:
        """Check the caller's identity against the channel's member set."""
        identity = self.connection.identity
        if identity is None:
            return False
        try:
            return self.resolver.is_member(channel_id, identity)
        except StoreError as exc:
            logger.warning("Admission check for %s failed: %s", channel_id, exc.message)
            return False
        finally:
            # Do not hold a read transaction open for the lifetime of the socket.
            self.resolver.session.rollback()

    def relay(self, event: str, channel_id: str | None, data: Any) -> None:
        if channel_id is None:
            self.reject(event, "channel_uuid is required")
            return
        if settings.room_admission == "members" and channel_id not in self.rooms.rooms_of(
            self.connection
        ):
            self.reject(event, f"Join channel {channel_id} before sending to it")
            return
        self.rooms.broadcast(channel_id, event, data)


@router.websocket("/ws")
async def channel_socket(
    websocket: WebSocket,
    db: SessionDep,
    rooms: RoomRegistryDep,
    token: str | None = None,
) -> None:
    """Serve one client: join and leave rooms, relay message and location events."""
    accepted, identity = _identity_from_token(token)
    if not accepted:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection = Connection(websocket, identity=identity, max_pending=settings.ws_outbox_size)
    connection.start()
    session = SocketSession(connection, rooms, ChannelMembershipResolver(db))
    logger.info("Socket %s connected (identity=%s)", connection.id, identity)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            text = message.get("text")
            session.handle(text if text is not None else message.get("bytes") or b"")
    finally:
        left = rooms.disconnect(connection)
        await connection.close()
        logger.info("Socket %s disconnected from %d room(s)", connection.id, len(left))
