"""Service layer package."""

from .booking_service import BookingResult, BookingService
from .contact_service import ContactService
from .destination_service import DestinationService
from .relay import RelayHub
from .tour_service import TourService

__all__ = [
    "BookingResult",
    "BookingService",
    "ContactService",
    "DestinationService",
    "RelayHub",
    "TourService",
]
