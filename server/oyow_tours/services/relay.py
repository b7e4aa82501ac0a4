"""
Realtime SOS relay.

Connected clients exchange JSON text frames shaped ``{"event": ..., "data": ...}``.
An ``sos`` event from one client is re-sent as ``sos-alert`` with the same
data to every other connected client. Nothing is persisted, acknowledged
or retried.
"""

import asyncio
import json
import uuid
from typing import Any, Optional, Protocol

from ..core.observability import get_logger, metrics_collector

logger = get_logger(__name__)

SOS_EVENT = "sos"
SOS_ALERT_EVENT = "sos-alert"


class Connection(Protocol):
    async def accept(self) -> None: ...

    async def send_text(self, data: str) -> None: ...

    async def receive(self) -> dict[str, Any]: ...


class RelayHub:
    """Registry of connected clients with broadcast-to-others."""

    def __init__(self):
        self._connections: dict[Connection, str] = {}

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection: Connection) -> bool:
        return connection in self._connections

    async def connect(self, connection: Connection) -> str:
        """Register and accept a connection; returns its relay ID."""
        connection_id = uuid.uuid4().hex[:12]
        # Registered before the handshake completes so a client is never
        # connected without being reachable by broadcasts.
        self._connections[connection] = connection_id
        try:
            await connection.accept()
        except Exception:
            self._connections.pop(connection, None)
            raise

        metrics_collector.set_relay_connections(len(self))
        logger.info("Relay client connected", connection_id=connection_id, connections=len(self))
        return connection_id

    def disconnect(self, connection: Connection) -> None:
        connection_id = self._connections.pop(connection, None)
        if connection_id is None:
            return
        metrics_collector.set_relay_connections(len(self))
        logger.info("Relay client disconnected", connection_id=connection_id, connections=len(self))

    async def _send(self, connection: Connection, frame: str) -> None:
        await connection.send_text(frame)

    async def broadcast_except(self, sender: Optional[Connection], event: str, data: Any) -> int:
        """
        Send ``event`` to every connection other than ``sender``.

        A failed send to one peer is logged and does not stop the others.

        Returns:
            Number of peers the frame was handed to successfully
        """
        frame = json.dumps({"event": event, "data": data})
        peers = [connection for connection in list(self._connections) if connection is not sender]
        if not peers:
            return 0

        results = await asyncio.gather(*(self._send(peer, frame) for peer in peers), return_exceptions=True)

        delivered = 0
        for peer, result in zip(peers, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Relay send failed",
                    connection_id=self._connections.get(peer),
                    event_name=event,
                    error=repr(result),
                )
            else:
                delivered += 1
        return delivered

    async def handle_frame(self, sender: Connection, raw: str) -> None:
        """Dispatch one incoming text frame."""
        sender_id = self._connections.get(sender)
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning("Relay frame is not JSON, ignoring", connection_id=sender_id)
            return

        if not isinstance(message, dict) or "event" not in message:
            logger.warning("Relay frame has no event, ignoring", connection_id=sender_id)
            return

        event = message["event"]
        if event != SOS_EVENT:
            logger.debug("Ignoring unsupported relay event", connection_id=sender_id, event_name=event)
            return

        data = message.get("data")
        logger.warning("SOS received via relay", connection_id=sender_id, sos=data)
        metrics_collector.record_sos("relay")
        delivered = await self.broadcast_except(sender, SOS_ALERT_EVENT, data)
        logger.info("SOS alert relayed", connection_id=sender_id, recipients=delivered)

    async def serve(self, connection: Connection) -> None:
        """
        Run a connection from handshake to disconnect.

        Binary frames are logged and skipped; only a disconnect ends the loop.
        """
        await self.connect(connection)
        try:
            while True:
                message = await connection.receive()
                if message["type"] == "websocket.disconnect":
                    break
                raw = message.get("text")
                if raw is None:
                    logger.warning("Relay frame is not text, ignoring", connection_id=self._connections.get(connection))
                    continue
                await self.handle_frame(connection, raw)
        finally:
            self.disconnect(connection)
