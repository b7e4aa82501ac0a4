"""Booking service for business logic operations."""

import logging
import secrets
import time
from dataclasses import dataclass

from ..core.database import PersistenceGateway, as_object_id
from ..core.exceptions import InvalidReferenceError, ValidationError
from ..core.observability import metrics_collector
from ..models.booking import Booking
from ..models.tour import Tour
from ..schemas.booking import CreateBookingRequest
from .fallback import write_best_effort
from .tour_service import TourService
from .validation import parse_iso_date, validate_booking

logger = logging.getLogger(__name__)

TEMPORARY_ID_PREFIX = "temp_"


def generate_temporary_id() -> str:
    """Return a time-based identifier marking a booking that never reached the store."""
    return f"{TEMPORARY_ID_PREFIX}{int(time.time() * 1000)}_{secrets.token_hex(3)}"


def is_temporary_id(booking_id: str) -> bool:
    return booking_id.startswith(TEMPORARY_ID_PREFIX)


def build_booking(request: CreateBookingRequest, tour: Tour) -> Booking:
    """
    Build a pending booking for a validated request.

    The total is copied from the tour price at this moment.
    """
    return Booking(
        tour_id=request.tour_id,
        name=request.name.strip(),
        email=request.email.strip().lower(),
        date=parse_iso_date(request.date),
        phone=request.phone.strip() if request.phone else None,
        special_requests=request.special_requests.strip() if request.special_requests else None,
        total_amount=tour.price,
    )


@dataclass
class BookingResult:
    """A booking plus whether it was durably stored."""

    booking: Booking
    saved: bool

    def to_response(self) -> dict:
        body = self.booking.to_response()
        body["saved"] = self.saved
        return body


class BookingService:
    """Service for booking-related operations."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
        self.tour_service = TourService(gateway)

    async def create_booking(self, request: CreateBookingRequest) -> BookingResult:
        """
        Accept a booking, persisting it when the store allows.

        Args:
            request: Booking creation request

        Returns:
            The booking with a store-assigned ID and ``saved=True``, or with a
            temporary ID and ``saved=False`` when the store write failed

        Raises:
            ValidationError: If required fields are missing or the date is not ISO 8601
            InvalidReferenceError: If the tour exists neither in the store nor the catalog
        """
        violations = validate_booking(request)
        if violations:
            logger.warning(
                "Booking rejected - validation failed",
                extra={"violations": [v.model_dump() for v in violations]},
            )
            raise ValidationError(
                detail="Booking request failed validation",
                violations=[v.model_dump() for v in violations],
            )

        tour = await self.tour_service.resolve_tour(request.tour_id)
        if tour is None:
            logger.warning("Booking rejected - unknown tour", extra={"tour_id": request.tour_id})
            raise InvalidReferenceError(field="tourId", value=request.tour_id, resource_type="tour")

        booking = build_booking(request, tour)
        document = booking.to_document()
        document["tourId"] = as_object_id(booking.tour_id)

        booking_id = await write_best_effort(
            lambda: self.gateway.insert(Booking.collection, document),
            resource="booking",
            payload=booking.to_response(),
        )

        saved = booking_id is not None
        booking.id = booking_id if saved else generate_temporary_id()
        metrics_collector.record_booking(saved)

        if saved:
            logger.info(
                "Booking created",
                extra={"booking_id": booking.id, "tour_id": booking.tour_id, "total_amount": booking.total_amount},
            )
        else:
            logger.error(
                "Booking accepted without persistence",
                extra={"booking_id": booking.id, "tour_id": booking.tour_id, "booking": booking.to_response()},
            )

        return BookingResult(booking=booking, saved=saved)
