"""Seed script tests."""

import pytest
from mongomock_motor import AsyncMongoMockClient

from scripts.seed import SAMPLE_DESTINATIONS, SAMPLE_TOURS, seed_database


@pytest.mark.asyncio
async def test_seed_replaces_collections():
    database = AsyncMongoMockClient()["oyow-tours-seed"]
    await database["tours"].insert_one({"title": "Stale tour", "isActive": True})

    inserted = await seed_database(database)

    assert inserted == {"tours": len(SAMPLE_TOURS), "destinations": len(SAMPLE_DESTINATIONS)}
    titles = {doc["title"] async for doc in database["tours"].find({})}
    assert "Stale tour" not in titles
    assert "Safari Adventure" in titles


@pytest.mark.asyncio
async def test_seeded_documents_use_stored_field_names():
    database = AsyncMongoMockClient()["oyow-tours-seed"]

    await seed_database(database)

    tour = await database["tours"].find_one({"title": "City Tour"})
    assert tour["isActive"] is True
    assert tour["price"] == 149
    assert "createdAt" in tour
    assert await database["destinations"].count_documents({"isActive": True}) == len(SAMPLE_DESTINATIONS)
