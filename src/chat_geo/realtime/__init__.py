"""In-process realtime fan-out over WebSocket connections."""

from .connection import Connection
from .rooms import RoomRegistry, Subscriber

__all__ = ["Connection", "RoomRegistry", "Subscriber"]
