"""Contact form submissions."""

import logging

from ..core.database import PersistenceGateway
from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..models.contact import Contact
from ..schemas.contact import ContactAck, ContactRequest
from .fallback import write_best_effort
from .validation import validate_contact

logger = logging.getLogger(__name__)


class ContactService:
    """Accepts contact submissions; a store failure never reaches the sender."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def submit_contact(self, request: ContactRequest) -> ContactAck:
        violations = validate_contact(request)
        if violations:
            raise ValidationError(
                detail="Missing required fields",
                violations=[v.model_dump() for v in violations],
            )

        contact = Contact(
            name=request.name.strip(),
            email=request.email.strip().lower(),
            subject=request.subject.strip(),
            message=request.message.strip(),
            tour_interest=request.tour_interest,
            phone=request.phone,
        )

        contact_id = await write_best_effort(
            lambda: self.gateway.insert(Contact.collection, contact.to_document()),
            resource="contact",
            payload=contact.to_response(),
        )
        metrics_collector.record_contact(contact_id is not None)

        return ContactAck()
