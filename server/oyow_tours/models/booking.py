"""Booking document definition."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .document import Amount, Document, utcnow


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Document):
    """
    A customer's booking of a tour.

    ``total_amount`` is copied from the tour price when the booking is
    created and is never recomputed afterwards.
    """

    collection = "bookings"

    tour_id: str
    name: str
    email: str
    date: datetime
    phone: Optional[str] = None
    special_requests: Optional[str] = None
    total_amount: Amount = Field(..., gt=0)
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, tour_id={self.tour_id}, status={self.status.value})>"
