"""A websocket connection that feeds incoming text onto an event bus."""

from __future__ import annotations

import asyncio
import contextlib
import logging

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedError

from wschat.event_bus import EventBus

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:8080"
CHANNEL_CAPACITY = 1000


class WebsocketService:
    """Queue outgoing text for the server and publish incoming text on a bus."""

    def __init__(self, bus: EventBus, url: str = DEFAULT_URL) -> None:
        self.bus = bus
        self.url = url
        self._outgoing: asyncio.Queue[str] = asyncio.Queue(maxsize=CHANNEL_CAPACITY)
        self._connection = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, text: str) -> None:
        """Queue ``text`` for sending.

        Raises asyncio.QueueFull when the queue is full and ConnectionError
        once the service has been closed.
        """
        if self._closed:
            raise ConnectionError("websocket service is closed")
        self._outgoing.put_nowait(text)

    async def run(self) -> None:
        """Connect and relay messages until the connection closes."""
        if self._closed:
            raise ConnectionError("websocket service is closed")
        async with websockets.connect(self.url) as connection:
            self._connection = connection
            if self._closed:
                return
            writer = asyncio.create_task(self._write(connection))
            try:
                await self._read(connection)
            finally:
                writer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await writer
                self._connection = None
        logger.debug("WebSocket Closed")

    async def close(self) -> None:
        """Stop accepting messages and close the connection if open."""
        self._closed = True
        if self._connection is not None:
            await self._connection.close()

    async def _write(self, connection) -> None:
        while True:
            text = await self._outgoing.get()
            logger.debug("got event from channel! %s", text)
            try:
                await connection.send(text)
            except ConnectionClosed as exc:
                logger.error("ws: %r", exc)
                return

    async def _read(self, connection) -> None:
        try:
            async for message in connection:
                if isinstance(message, bytes):
                    try:
                        message = message.decode("utf-8")
                    except UnicodeDecodeError:
                        continue
                logger.debug("from websocket: %s", message)
                self.bus.send(message)
        except ConnectionClosedError as exc:
            logger.error("ws: %r", exc)