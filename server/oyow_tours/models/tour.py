"""Tour document definition."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .document import Amount, Document


class Tour(Document):
    """Tour offering shown on the website."""

    collection = "tours"

    title: str
    description: str
    price: Amount = Field(..., gt=0)
    duration: int = Field(..., ge=1, description="Length in days")
    location: str
    image: Optional[str] = None
    highlights: list[str] = Field(default_factory=list)
    rating: float = Field(0, ge=0, le=5)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, title='{self.title}', price={self.price})>"
