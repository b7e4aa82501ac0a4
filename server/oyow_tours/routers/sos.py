"""HTTP SOS acknowledgement."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.observability import metrics_collector
from ..schemas.sos import SosAck, SosRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sos", tags=["sos"])


@router.post("", response_model=SosAck)
async def submit_sos(request: SosRequest) -> JSONResponse:
    """
    Acknowledge an SOS submitted over HTTP.

    The ping is logged and counted only. It is not forwarded to clients
    connected to the realtime relay; those use the ``sos`` event instead.
    """
    logger.warning(
        "SOS received via HTTP",
        extra={"lat": request.lat, "lng": request.lng, "sos_message": request.message},
    )
    metrics_collector.record_sos("http")

    ack = SosAck(timestamp=datetime.now(timezone.utc))
    return JSONResponse(status_code=200, content=ack.model_dump(mode="json"))
