"""Unit tests for contact service."""

import logging

import pytest

from oyow_tours.core.database import PersistenceGateway
from oyow_tours.core.exceptions import ValidationError
from oyow_tours.schemas.contact import ContactRequest
from oyow_tours.services.contact_service import ContactService


@pytest.mark.asyncio
async def test_submit_contact_persists(store, sample_contact_data):
    service = ContactService(store)

    ack = await service.submit_contact(ContactRequest(**sample_contact_data))

    assert ack.success is True
    document = await store.database["contacts"].find_one({})
    assert document["subject"] == "Group discount"
    assert document["tourInterest"] == "1"


@pytest.mark.asyncio
async def test_submit_contact_missing_fields_never_touches_store(store, monkeypatch):
    """Validation runs before any store call."""
    async def insert(self, collection, document):
        raise AssertionError("store must not be called")

    monkeypatch.setattr(PersistenceGateway, "insert", insert)
    service = ContactService(store)

    with pytest.raises(ValidationError) as exc_info:
        await service.submit_contact(ContactRequest(name="A"))

    assert exc_info.value.status_code == 400
    assert {v["path"] for v in exc_info.value.violations} == {"email", "subject", "message"}


@pytest.mark.asyncio
async def test_submit_contact_blank_field_is_missing(store, sample_contact_data):
    service = ContactService(store)

    with pytest.raises(ValidationError):
        await service.submit_contact(ContactRequest(**dict(sample_contact_data, message="   ")))


@pytest.mark.asyncio
async def test_submit_contact_unreachable_store_still_acknowledges(unreachable_store, sample_contact_data, caplog):
    """A failed write is acknowledged and the payload kept in the error log."""
    service = ContactService(unreachable_store)

    with caplog.at_level(logging.ERROR, logger="oyow_tours.services.fallback"):
        ack = await service.submit_contact(ContactRequest(**sample_contact_data))

    assert ack.success is True
    records = [r for r in caplog.records if r.name == "oyow_tours.services.fallback"]
    assert records
    assert records[0].payload["email"] == "otieno@mail.co.ke"
    assert records[0].payload["message"] == sample_contact_data["message"]
