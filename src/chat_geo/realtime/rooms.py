"""Room registry: live mapping from channel ids to connected subscribers.

All methods are synchronous and never await, so on a single event loop every
call is atomic with respect to every other call and no lock is needed.
Delivery goes through ``Subscriber.send``, which must not block.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from chat_geo.realtime import events

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    """Anything that can receive frames from the registry."""

    id: str

    def send(self, message: dict[str, Any]) -> None:
        """Accept a frame for delivery without blocking."""
        ...


class RoomRegistry:
    """Tracks which subscribers are joined to which channel room.

    Rooms are insertion ordered, so fan-out visits occupants in join order.
    Empty rooms are removed.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, dict[Subscriber, None]] = {}
        self._memberships: dict[Subscriber, dict[str, None]] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def occupants(self, channel_id: str) -> list[Subscriber]:
        """Return the subscribers currently in a room."""
        return list(self._rooms.get(channel_id, ()))

    def rooms_of(self, subscriber: Subscriber) -> list[str]:
        """Return the rooms a subscriber is joined to."""
        return list(self._memberships.get(subscriber, ()))

    def snapshot(self) -> dict[str, list[str]]:
        """Return ``room -> subscriber ids`` for diagnostics."""
        return {room: [sub.id for sub in subs] for room, subs in self._rooms.items()}

    def join(self, subscriber: Subscriber, channel_id: str) -> bool:
        """Add ``subscriber`` to a room and notify every occupant.

        Joining a room twice has the effect of joining once. Returns True if the
        subscriber was newly added.
        """
        room = self._rooms.setdefault(channel_id, {})
        if subscriber in room:
            return False
        room[subscriber] = None
        self._memberships.setdefault(subscriber, {})[channel_id] = None
        logger.info("Connection %s joined room %s", subscriber.id, channel_id)
        self._notify_membership(channel_id, subscriber, "joined")
        return True

    def leave(self, subscriber: Subscriber, channel_id: str) -> bool:
        """Remove ``subscriber`` from a room and notify the remaining occupants.

        A no-op when the subscriber is not in the room. Returns True if it was removed.
        """
        if not self._discard(subscriber, channel_id):
            return False
        logger.info("Connection %s left room %s", subscriber.id, channel_id)
        self._notify_membership(channel_id, subscriber, "left")
        return True

    def disconnect(self, subscriber: Subscriber) -> list[str]:
        """Remove ``subscriber`` from every room; return the rooms it left."""
        left = self.rooms_of(subscriber)
        for channel_id in left:
            self._discard(subscriber, channel_id)
            self._notify_membership(channel_id, subscriber, "left")
        self._memberships.pop(subscriber, None)
        if left:
            logger.info("Connection %s disconnected from %d room(s)", subscriber.id, len(left))
        return left

    def broadcast(
        self,
        channel_id: str,
        event: str,
        data: Any,
        *,
        exclude: Subscriber | None = None,
    ) -> int:
        """Hand a frame to every occupant of a room; return how many received it.

        Best-effort: no acknowledgment and no retry. A subscriber whose ``send``
        raises is skipped.
        """
        message = events.frame(event, data)
        delivered = 0
        for subscriber in self.occupants(channel_id):
            if subscriber is exclude:
                continue
            try:
                subscriber.send(message)
            except Exception:  # noqa: BLE001 - one bad subscriber must not stop fan-out
                logger.exception("Delivery to %s in room %s failed", subscriber.id, channel_id)
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        """Forget every room and subscriber."""
        self._rooms.clear()
        self._memberships.clear()

    def _discard(self, subscriber: Subscriber, channel_id: str) -> bool:
        room = self._rooms.get(channel_id)
        if room is None or subscriber not in room:
            return False
        del room[subscriber]
        if not room:
            del self._rooms[channel_id]
        joined = self._memberships.get(subscriber)
        if joined is not None:
            joined.pop(channel_id, None)
            if not joined:
                del self._memberships[subscriber]
        return True

    def _notify_membership(self, channel_id: str, subscriber: Subscriber, action: str) -> None:
        self.broadcast(
            channel_id,
            events.MEMBERSHIP,
            {
                "channel_uuid": channel_id,
                "connection_id": subscriber.id,
                "action": action,
                "count": len(self._rooms.get(channel_id, ())),
            },
        )
