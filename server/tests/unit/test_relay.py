"""Unit tests for the realtime SOS relay."""

import asyncio
import json

import pytest
from oyow_tours.services.relay import SOS_ALERT_EVENT, RelayHub

SOS_PAYLOAD = {"lat": -1.2921, "lng": 36.8219, "message": "Lost near the gate", "user": "guest-7"}


class FakeConnection:
    """In-memory stand-in for a WebSocket."""

    def __init__(self, fail_sends: bool = False):
        self.accepted = False
        self.fail_sends = fail_sends
        self.sent: list[dict] = []
        self.incoming: asyncio.Queue = asyncio.Queue()

    async def accept(self) -> None:
        self.accepted = True

    async def send_text(self, data: str) -> None:
        if self.fail_sends:
            raise RuntimeError("peer went away")
        self.sent.append(json.loads(data))

    async def receive(self) -> dict:
        frame = await self.incoming.get()
        if frame is None:
            return {"type": "websocket.disconnect", "code": 1000}
        if isinstance(frame, bytes):
            return {"type": "websocket.receive", "bytes": frame}
        return {"type": "websocket.receive", "text": frame}


def sos_frame(data=SOS_PAYLOAD) -> str:
    return json.dumps({"event": "sos", "data": data})


@pytest.fixture
def hub():
    return RelayHub()


@pytest.mark.asyncio
async def test_sos_reaches_every_peer_but_the_sender(hub):
    a, b, c = FakeConnection(), FakeConnection(), FakeConnection()
    for connection in (a, b, c):
        await hub.connect(connection)

    await hub.handle_frame(a, sos_frame())

    assert b.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]
    assert c.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]
    assert a.sent == []


@pytest.mark.asyncio
async def test_disconnected_peer_is_skipped(hub):
    a, b, c = FakeConnection(), FakeConnection(), FakeConnection()
    for connection in (a, b, c):
        await hub.connect(connection)

    hub.disconnect(b)
    await hub.handle_frame(a, sos_frame())

    assert b not in hub
    assert len(hub) == 2
    assert b.sent == []
    assert c.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]


@pytest.mark.asyncio
async def test_failed_send_does_not_affect_other_peers(hub):
    a, broken, c = FakeConnection(), FakeConnection(fail_sends=True), FakeConnection()
    for connection in (a, broken, c):
        await hub.connect(connection)

    delivered = await hub.broadcast_except(a, SOS_ALERT_EVENT, SOS_PAYLOAD)

    assert delivered == 1
    assert c.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]


@pytest.mark.asyncio
async def test_connect_accepts_and_registers(hub):
    connection = FakeConnection()

    await hub.connect(connection)

    assert connection.accepted
    assert connection in hub


@pytest.mark.asyncio
async def test_disconnect_twice_is_harmless(hub):
    connection = FakeConnection()
    await hub.connect(connection)

    hub.disconnect(connection)
    hub.disconnect(connection)

    assert len(hub) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("frame", [
    "not json",
    json.dumps(["sos"]),
    json.dumps({"data": SOS_PAYLOAD}),
    json.dumps({"event": "chat", "data": "hello"}),
])
async def test_unusable_frames_are_ignored(hub, frame):
    a, b = FakeConnection(), FakeConnection()
    await hub.connect(a)
    await hub.connect(b)

    await hub.handle_frame(a, frame)

    assert b.sent == []
    assert len(hub) == 2


@pytest.mark.asyncio
async def test_serve_runs_until_disconnect(hub):
    a, b = FakeConnection(), FakeConnection()
    await hub.connect(b)

    task = asyncio.create_task(hub.serve(a))
    await a.incoming.put(sos_frame())
    await a.incoming.put(None)
    await asyncio.wait_for(task, timeout=1)

    assert b.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]
    assert a not in hub
    assert len(hub) == 1


@pytest.mark.asyncio
async def test_serve_skips_binary_frames(hub):
    a, b = FakeConnection(), FakeConnection()
    await hub.connect(b)

    task = asyncio.create_task(hub.serve(a))
    await a.incoming.put(b"\x00\x01")
    await a.incoming.put(sos_frame())
    await a.incoming.put(None)
    await asyncio.wait_for(task, timeout=1)

    assert b.sent == [{"event": SOS_ALERT_EVENT, "data": SOS_PAYLOAD}]
    assert a not in hub
