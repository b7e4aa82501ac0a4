"""Test configuration and fixtures."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorClient

from oyow_tours.core.database import PersistenceGateway
from oyow_tours.core.dependencies import get_gateway
from oyow_tours.main import create_app

TEST_DATABASE = "oyow-tours-test"

# Nothing listens on port 1; server selection gives up after 100 ms
UNREACHABLE_STORE_URI = f"mongodb://127.0.0.1:1/{TEST_DATABASE}"


@pytest.fixture
def store():
    """Gateway over an in-memory store that always answers."""
    client = AsyncMongoMockClient()
    return PersistenceGateway(client[TEST_DATABASE], timeout_seconds=2)


@pytest_asyncio.fixture
async def unreachable_store():
    """Gateway over a real motor client that can never reach a server."""
    client = AsyncIOMotorClient(
        UNREACHABLE_STORE_URI,
        serverSelectionTimeoutMS=100,
        connectTimeoutMS=100,
    )
    yield PersistenceGateway(client[TEST_DATABASE], timeout_seconds=2)
    client.close()


def _app_with_gateway(gateway):
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: gateway
    return app


@pytest_asyncio.fixture
async def test_app(store):
    """Application wired to the in-memory store."""
    app = _app_with_gateway(store)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def degraded_app(unreachable_store):
    """Application whose store is unreachable."""
    app = _app_with_gateway(unreachable_store)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(test_app):
    """HTTP client for the application with a working store."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def degraded_client(degraded_app):
    """HTTP client for the application with an unreachable store."""
    transport = ASGITransport(app=degraded_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_tour_data():
    """Sample stored tour document."""
    now = datetime.now(timezone.utc)
    return {
        "title": "Safari Adventure",
        "description": "Experience the wild beauty of African wildlife in their natural habitat",
        "price": 599,
        "duration": 5,
        "location": "Maasai Mara, Kenya",
        "image": "/assets/safari-adventure.jpg",
        "highlights": ["Big Five Safari", "Luxury Lodges"],
        "rating": 4.9,
        "isActive": True,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest_asyncio.fixture
async def stored_tour(store, sample_tour_data):
    """Insert the sample tour and return its string ID."""
    result = await store.database["tours"].insert_one(dict(sample_tour_data))
    return str(result.inserted_id)


@pytest.fixture
def sample_booking_data():
    """Sample booking request body."""
    return {
        "tourId": "1",
        "name": "Wanjiru Kamau",
        "email": "Wanjiru.Kamau@Mail.co.ke",
        "date": "2026-12-15",
        "phone": "+254 700 000 000",
        "specialRequests": "Vegetarian meals",
    }


@pytest.fixture
def sample_contact_data():
    """Sample contact form body."""
    return {
        "name": "Otieno Ouma",
        "email": "otieno@mail.co.ke",
        "subject": "Group discount",
        "message": "Do you offer discounts for groups of ten?",
        "tourInterest": "1",
    }


@pytest.fixture
def sample_destination_data():
    """Sample destination body."""
    return {
        "name": "Lamu Old Town",
        "location": "Lamu, Kenya",
        "description": "Swahili stone town on the northern coast",
        "rating": 4.6,
        "price": 220,
    }
