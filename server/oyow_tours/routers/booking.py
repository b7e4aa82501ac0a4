"""Booking router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import Bookings
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.booking import CreateBookingRequest
from ..services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", status_code=201)
async def create_booking(
    request: CreateBookingRequest,
    booking_service: BookingService = Bookings,
) -> JSONResponse:
    """
    Create a booking.

    Answers 201 even when the store write fails; the body then carries a
    temporary ``_id`` and ``saved: false`` for later reconciliation.
    """
    try:
        result = await booking_service.create_booking(request)
    except ProblemDetailsException:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error in booking creation",
            extra={"tour_id": request.tour_id, "error": str(e)},
            exc_info=True,
        )
        raise InternalServerError(detail="Failed to create booking")

    return JSONResponse(status_code=201, content=result.to_response())
