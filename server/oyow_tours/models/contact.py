"""Contact submission document definition."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .document import Document, utcnow


class Contact(Document):
    """A message left through the website contact form."""

    collection = "contacts"

    name: str
    email: str
    subject: str
    message: str
    tour_interest: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
