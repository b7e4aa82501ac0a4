"""Destination router: CRUD and search with ``{success, data|message}`` envelopes."""

import logging
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ..core.dependencies import Destinations
from ..core.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from ..schemas.common import Envelope
from ..schemas.destination import DestinationPayload
from ..services.destination_service import DestinationService, parse_search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/destinations", tags=["destinations"])


def _envelope(status_code: int, envelope: Envelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_response())


async def _respond(
    operation: Callable[[], Awaitable[Envelope]],
    failure_message: str,
    success_status: int = 200,
) -> JSONResponse:
    """Run a destination operation and map its outcome to an envelope response."""
    try:
        envelope = await operation()
    except ValidationError as e:
        return _envelope(
            400,
            Envelope(success=False, message=failure_message, error=e.problem_details.get("detail"), violations=e.violations or None),
        )
    except NotFoundError:
        return _envelope(404, Envelope(success=False, message="Destination not found"))
    except StoreUnavailableError as e:
        logger.error(
            failure_message,
            extra={"operation": e.operation, "reason": e.reason},
        )
        return _envelope(
            500,
            Envelope(success=False, message=failure_message, error=e.reason or "store unavailable"),
        )
    return _envelope(success_status, envelope)


@router.get("")
async def list_destinations(service: DestinationService = Destinations) -> JSONResponse:
    """List active destinations."""
    async def operation() -> Envelope:
        destinations = await service.list_destinations()
        return Envelope(success=True, count=len(destinations), data=[d.to_response() for d in destinations])

    return await _respond(operation, "Error fetching destinations")


@router.get("/search")
async def search_destinations(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    min_rating: Optional[str] = Query(None, alias="minRating", description="Minimum rating"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Maximum price"),
    service: DestinationService = Destinations,
) -> JSONResponse:
    """Search active destinations; every supplied filter must match."""
    async def operation() -> Envelope:
        search = parse_search(name=name, location=location, min_rating=min_rating, max_price=max_price)
        destinations = await service.search_destinations(search)
        return Envelope(success=True, count=len(destinations), data=[d.to_response() for d in destinations])

    return await _respond(operation, "Error searching destinations")


@router.get("/{destination_id}")
async def get_destination(destination_id: str, service: DestinationService = Destinations) -> JSONResponse:
    async def operation() -> Envelope:
        destination = await service.get_destination(destination_id)
        return Envelope(success=True, data=destination.to_response())

    return await _respond(operation, "Error fetching destination")


@router.post("", status_code=201)
async def create_destination(payload: DestinationPayload, service: DestinationService = Destinations) -> JSONResponse:
    async def operation() -> Envelope:
        destination = await service.create_destination(payload)
        return Envelope(success=True, data=destination.to_response())

    return await _respond(operation, "Error creating destination", success_status=201)


@router.put("/{destination_id}")
async def update_destination(
    destination_id: str,
    payload: DestinationPayload,
    service: DestinationService = Destinations,
) -> JSONResponse:
    async def operation() -> Envelope:
        destination = await service.update_destination(destination_id, payload)
        return Envelope(success=True, data=destination.to_response())

    return await _respond(operation, "Error updating destination")


@router.delete("/{destination_id}")
async def delete_destination(destination_id: str, service: DestinationService = Destinations) -> JSONResponse:
    """Soft-delete a destination."""
    async def operation() -> Envelope:
        await service.delete_destination(destination_id)
        return Envelope(success=True, message="Destination deleted successfully")

    return await _respond(operation, "Error deleting destination")
