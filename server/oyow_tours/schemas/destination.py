"""Destination-related Pydantic schemas."""

from typing import Optional

from pydantic import Field

from ..models.document import Amount
from .common import CamelModel


class DestinationPayload(CamelModel):
    """
    Body for creating or updating a destination.

    Creation requires ``name`` and ``location``; updates accept any subset.
    The rules live in ``validate_destination``.
    """

    name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    rating: Optional[float] = None
    price: Optional[Amount] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None


class DestinationSearch(CamelModel):
    """Optional, AND-combined filters for destination search."""

    name: Optional[str] = None
    location: Optional[str] = None
    min_rating: Optional[float] = None
    max_price: Optional[float] = None
