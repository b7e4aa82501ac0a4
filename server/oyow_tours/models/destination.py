"""Destination document definition."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .document import Amount, Document, utcnow


class Destination(Document):
    """A destination that can be browsed and searched."""

    collection = "destinations"

    name: str
    location: str
    description: Optional[str] = None
    rating: float = Field(0, ge=0, le=5)
    price: Amount = Field(0, ge=0)
    image: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}', location='{self.location}')>"
