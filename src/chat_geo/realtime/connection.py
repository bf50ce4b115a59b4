"""WebSocket subscriber with a non-blocking outbox."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from uuid import uuid4

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

_CLOSE = object()


class Connection:
    """One client socket registered with the room registry.

    ``send`` only enqueues; a writer task started with :meth:`start` drains the
    outbox to the socket in FIFO order. When the outbox is full the event is
    dropped so a slow client never stalls the event loop.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        identity: str | None = None,
        max_pending: int = 256,
    ) -> None:
        self.id = uuid4().hex
        self.identity = identity
        self.websocket = websocket
        self._outbox: asyncio.Queue[Any] = asyncio.Queue(maxsize=max_pending)
        self._writer: asyncio.Task[None] | None = None
        self.dropped = 0

    def __repr__(self) -> str:
        return f"Connection(id={self.id!r}, identity={self.identity!r})"

    def send(self, message: dict[str, Any]) -> None:
        """Queue ``message`` for delivery without waiting."""
        try:
            self._outbox.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("Dropping %s event for slow connection %s", message.get("event"), self.id)

    def start(self) -> None:
        """Start the writer task."""
        if self._writer is None or self._writer.done():
            self._writer = asyncio.create_task(self._drain())

    async def close(self) -> None:
        """Stop the writer after already queued events have been flushed."""
        if self._writer is None:
            return
        while True:
            try:
                self._outbox.put_nowait(_CLOSE)
                break
            except asyncio.QueueFull:
                # Make room for the sentinel; the oldest pending event is lost.
                self._outbox.get_nowait()
                self.dropped += 1
        await self._writer
        self._writer = None

    async def _drain(self) -> None:
        while True:
            message = await self._outbox.get()
            if message is _CLOSE:
                return
            if self.websocket.application_state != WebSocketState.CONNECTED:
                continue
            try:
                await self.websocket.send_json(message)
            except Exception as exc:  # noqa: BLE001 - delivery is best-effort
                logger.debug("Send to connection %s failed: %s", self.id, exc)
