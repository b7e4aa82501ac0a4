"""Contact form router."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import Contacts
from ..schemas.contact import ContactAck, ContactRequest
from ..services.contact_service import ContactService

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=ContactAck)
async def submit_contact(request: ContactRequest, contact_service: ContactService = Contacts) -> JSONResponse:
    """Accept a contact submission; 400 when a required field is missing."""
    ack = await contact_service.submit_contact(request)
    return JSONResponse(status_code=200, content=ack.model_dump())
