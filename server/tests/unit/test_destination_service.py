"""Unit tests for destination service."""

import pytest
import pytest_asyncio

from oyow_tours.core.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from oyow_tours.schemas.destination import DestinationPayload, DestinationSearch
from oyow_tours.services.destination_service import DestinationService, build_search_query, parse_search

DESTINATIONS = [
    {"name": "Maasai Mara", "location": "Narok, Kenya", "rating": 4.9, "price": 450},
    {"name": "Lamu Old Town", "location": "Lamu, Kenya", "rating": 4.6, "price": 220},
    {"name": "Hell's Gate", "location": "Naivasha, Kenya", "rating": 4.4, "price": 90},
    {"name": "Zanzibar Stone Town", "location": "Zanzibar, Tanzania", "rating": 4.7, "price": 300},
]


@pytest.fixture
def service(store):
    return DestinationService(store)


@pytest_asyncio.fixture
async def seeded(service):
    created = []
    for data in DESTINATIONS:
        created.append(await service.create_destination(DestinationPayload(**data)))
    return created


@pytest.mark.asyncio
async def test_create_destination(service, sample_destination_data):
    destination = await service.create_destination(DestinationPayload(**sample_destination_data))

    assert destination.id is not None
    assert destination.is_active is True
    fetched = await service.get_destination(destination.id)
    assert fetched.name == "Lamu Old Town"


@pytest.mark.asyncio
async def test_create_destination_requires_name_and_location(service):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_destination(DestinationPayload(rating=7))

    assert {v["path"] for v in exc_info.value.violations} == {"name", "location", "rating"}


@pytest.mark.asyncio
async def test_list_destinations_only_active(service, store):
    kept = await service.create_destination(DestinationPayload(name="Amboseli", location="Kajiado, Kenya"))
    dropped = await service.create_destination(DestinationPayload(name="Tsavo", location="Taita, Kenya"))
    await service.delete_destination(dropped.id)

    destinations = await service.list_destinations()

    assert [d.id for d in destinations] == [kept.id]
    # Soft delete keeps the document
    assert await store.database["destinations"].count_documents({}) == 2


@pytest.mark.asyncio
async def test_search_filters_combine_with_and(service, seeded):
    results = await service.search_destinations(DestinationSearch(location="kenya", min_rating=4.5, max_price=300))

    assert [d.name for d in results] == ["Lamu Old Town"]


@pytest.mark.asyncio
async def test_search_name_is_case_insensitive_substring(service, seeded):
    results = await service.search_destinations(DestinationSearch(name="TOWN"))

    assert {d.name for d in results} == {"Lamu Old Town", "Zanzibar Stone Town"}


@pytest.mark.asyncio
async def test_search_without_filters_lists_active(service, seeded):
    results = await service.search_destinations(DestinationSearch())

    assert len(results) == len(DESTINATIONS)


@pytest.mark.asyncio
async def test_search_input_is_not_a_regex(service, seeded):
    results = await service.search_destinations(DestinationSearch(name=".*"))

    assert results == []


def test_build_search_query():
    query = build_search_query(DestinationSearch(name="mara", min_rating=4.0))

    assert query == {
        "isActive": True,
        "name": {"$regex": "mara", "$options": "i"},
        "rating": {"$gte": 4.0},
    }


def test_parse_search_rejects_non_numeric_filters():
    with pytest.raises(ValidationError) as exc_info:
        parse_search(min_rating="high", max_price="cheap")

    assert {v["path"] for v in exc_info.value.violations} == {"minRating", "maxPrice"}


@pytest.mark.asyncio
async def test_update_destination_partial(service, seeded):
    target = seeded[0]

    updated = await service.update_destination(target.id, DestinationPayload(price=500))

    assert updated.price == 500
    assert updated.name == target.name


@pytest.mark.asyncio
async def test_update_destination_rejects_blank_name(service, seeded):
    with pytest.raises(ValidationError):
        await service.update_destination(seeded[0].id, DestinationPayload(name=""))


@pytest.mark.asyncio
async def test_missing_destination_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_destination("missing")
    with pytest.raises(NotFoundError):
        await service.update_destination("missing", DestinationPayload(price=1))
    with pytest.raises(NotFoundError):
        await service.delete_destination("missing")


@pytest.mark.asyncio
async def test_destinations_do_not_degrade(unreachable_store):
    service = DestinationService(unreachable_store)

    with pytest.raises(StoreUnavailableError):
        await service.list_destinations()
