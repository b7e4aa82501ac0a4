"""
Per-entity validation rules.

Each ``validate_*`` function inspects a request payload and returns the
list of violations found; an empty list means the payload is acceptable.
They never touch the store, so callers run them before any persistence.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from ..schemas.booking import CreateBookingRequest
from ..schemas.common import Violation
from ..schemas.contact import ContactRequest
from ..schemas.destination import DestinationPayload


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _require(payload: Any, fields: dict[str, str]) -> list[Violation]:
    """Report each attribute of ``fields`` (attr -> wire name) that is missing or blank."""
    return [
        Violation(path=wire_name, message="Field is required")
        for attr, wire_name in fields.items()
        if _blank(getattr(payload, attr))
    ]


def parse_iso_date(value: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 date or datetime.

    Naive values are taken as UTC. Returns None when the value is not ISO 8601.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_booking(request: CreateBookingRequest) -> list[Violation]:
    """Check a booking request: tourId, name, email and an ISO 8601 date are required."""
    violations = _require(request, {"tour_id": "tourId", "name": "name", "email": "email", "date": "date"})
    if not _blank(request.date) and parse_iso_date(request.date) is None:
        violations.append(Violation(path="date", message="Date must be an ISO 8601 date or datetime"))
    return violations


def validate_contact(request: ContactRequest) -> list[Violation]:
    """Check a contact submission: name, email, subject and message are required."""
    return _require(
        request,
        {"name": "name", "email": "email", "subject": "subject", "message": "message"},
    )


def validate_destination(payload: DestinationPayload, partial: bool = False) -> list[Violation]:
    """
    Check a destination body.

    With ``partial`` (updates) only the fields that are present are checked.
    """
    violations: list[Violation] = []
    if not partial:
        violations.extend(_require(payload, {"name": "name", "location": "location"}))
    else:
        for attr in ("name", "location"):
            if attr in payload.model_fields_set and _blank(getattr(payload, attr)):
                violations.append(Violation(path=attr, message="Field cannot be blank"))

    if payload.rating is not None and not 0 <= payload.rating <= 5:
        violations.append(Violation(path="rating", message="Rating must be between 0 and 5"))
    if payload.price is not None and payload.price < 0:
        violations.append(Violation(path="price", message="Price cannot be negative"))
    return violations


def parse_number_filter(value: Optional[str], path: str, violations: list[Violation]) -> Optional[float]:
    """Parse an optional numeric query filter, recording a violation when it is not a number."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        violations.append(Violation(path=path, message="Must be a number"))
        return None
