"""Service status router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.database import PersistenceGateway
from ..core.dependencies import Gateway
from ..schemas.status import DatabaseState, HealthStatus, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/status", response_model=StatusResponse)
async def status(gateway: PersistenceGateway = Gateway) -> JSONResponse:
    """
    Report whether the document store answers a ping.

    Always 200; an unreachable store is reported as ``unhealthy``.
    """
    connected = await gateway.ping()

    response_data = StatusResponse(
        database=DatabaseState.CONNECTED if connected else DatabaseState.DISCONNECTED,
        status=HealthStatus.HEALTHY if connected else HealthStatus.UNHEALTHY,
        timestamp=datetime.now(timezone.utc),
    )

    logger.debug(
        "Status check requested",
        extra={"database": response_data.database.value, "status": response_data.status.value},
    )

    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
