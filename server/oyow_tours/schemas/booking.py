"""Booking-related Pydantic schemas."""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class CreateBookingRequest(CamelModel):
    """
    Request schema for creating a booking.

    Every field is optional at the parsing layer; required fields are
    enforced by ``validate_booking`` so that the response is a 400 with
    per-field violations.
    """

    tour_id: Optional[str] = Field(None, description="Tour to book")
    name: Optional[str] = Field(None, max_length=200, description="Customer name")
    email: Optional[str] = Field(None, max_length=320, description="Customer email")
    date: Optional[str] = Field(None, description="Requested date (ISO 8601)")
    phone: Optional[str] = Field(None, max_length=50, description="Contact phone")
    special_requests: Optional[str] = Field(None, max_length=2000, description="Free-text requests")
