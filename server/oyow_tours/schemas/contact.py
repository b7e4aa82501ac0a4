"""Contact form Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from .common import CamelModel


class ContactRequest(CamelModel):
    """Request schema for a contact form submission."""

    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    subject: Optional[str] = Field(None, max_length=300)
    message: Optional[str] = Field(None, max_length=5000)
    tour_interest: Optional[str] = Field(None, description="Tour the sender is asking about")
    phone: Optional[str] = Field(None, max_length=50)


class ContactAck(BaseModel):
    """Acknowledgement returned for every accepted submission."""

    success: bool = True
    message: str = "Message received. We will get back to you shortly."
