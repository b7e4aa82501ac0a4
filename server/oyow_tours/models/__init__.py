"""Models module exporting all stored document types."""

from .booking import Booking, BookingStatus
from .contact import Contact
from .destination import Destination
from .document import Document
from .tour import Tour

__all__ = [
    "Document",

    # Catalog entities
    "Tour",
    "Destination",

    # Customer submissions
    "Booking",
    "BookingStatus",
    "Contact",
]
