"""WebSocket endpoint for the realtime SOS relay."""

from fastapi import APIRouter, WebSocket

from ..core.dependencies import Relay
from ..services.relay import RelayHub

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def relay_endpoint(websocket: WebSocket, relay: RelayHub = Relay) -> None:
    """Join the relay: ``sos`` frames sent here reach every other client as ``sos-alert``."""
    await relay.serve(websocket)
