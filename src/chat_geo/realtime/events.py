"""Names and frame shapes of realtime events.

Every frame in either direction is a JSON object ``{"event": <name>, "data": <payload>}``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Client -> server
JOIN_CHANNEL = "joinChannel"
LEAVE_CHANNEL = "leaveChannel"

# Both directions
MESSAGE = "message"
LOCATION = "location"

# Server -> client
MEMBERSHIP = "membership"
ERROR = "error"

ROOM_EVENTS = frozenset({MESSAGE, LOCATION})


class ClientFrame(BaseModel):
    """A frame received from a client."""

    event: str = Field(..., min_length=1)
    data: Any = None


def frame(event: str, data: Any) -> dict[str, Any]:
    """Build an outbound frame."""
    return {"event": event, "data": data}


def channel_id_from(data: Any) -> str | None:
    """Extract a channel id from a payload.

    Accepts a bare string or an object carrying ``channel_uuid`` (or ``channelId``).
    """
    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, dict):
        value = data.get("channel_uuid") or data.get("channelId")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
