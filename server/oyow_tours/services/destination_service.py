"""Destination service for business logic operations."""

import logging
import re
from typing import Any, Optional

from ..core.database import PersistenceGateway
from ..core.exceptions import NotFoundError, ValidationError
from ..models.destination import Destination
from ..models.document import utcnow
from ..schemas.destination import DestinationPayload, DestinationSearch
from ..schemas.common import Violation
from .validation import parse_number_filter, validate_destination

logger = logging.getLogger(__name__)


def _raise_if_invalid(violations: list[Violation], detail: str) -> None:
    if violations:
        raise ValidationError(detail=detail, violations=[v.model_dump() for v in violations])


def parse_search(
    name: Optional[str] = None,
    location: Optional[str] = None,
    min_rating: Optional[str] = None,
    max_price: Optional[str] = None,
) -> DestinationSearch:
    """
    Build search filters from raw query values.

    Raises:
        ValidationError: If minRating or maxPrice is not a number
    """
    violations: list[Violation] = []
    search = DestinationSearch(
        name=name or None,
        location=location or None,
        min_rating=parse_number_filter(min_rating, "minRating", violations),
        max_price=parse_number_filter(max_price, "maxPrice", violations),
    )
    _raise_if_invalid(violations, "Invalid search filters")
    return search


def build_search_query(search: DestinationSearch) -> dict[str, Any]:
    """Translate search filters into a store query; all filters combine with AND."""
    query: dict[str, Any] = {"isActive": True}
    if search.name:
        query["name"] = {"$regex": re.escape(search.name), "$options": "i"}
    if search.location:
        query["location"] = {"$regex": re.escape(search.location), "$options": "i"}
    if search.min_rating is not None:
        query["rating"] = {"$gte": search.min_rating}
    if search.max_price is not None:
        query["price"] = {"$lte": search.max_price}
    return query


class DestinationService:
    """
    Service for destination CRUD and search.

    Unlike tours, destinations have no static substitute, so a store failure
    propagates as StoreUnavailableError.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def _find(self, query: dict[str, Any]) -> list[Destination]:
        documents = await self.gateway.find_many(Destination.collection, query)
        return [Destination.from_document(document) for document in documents]

    async def list_destinations(self) -> list[Destination]:
        return await self._find({"isActive": True})

    async def search_destinations(self, search: DestinationSearch) -> list[Destination]:
        query = build_search_query(search)
        destinations = await self._find(query)
        logger.info(
            "Destination search",
            extra={"filters": search.model_dump(exclude_none=True), "count": len(destinations)},
        )
        return destinations

    async def get_destination(self, destination_id: str) -> Destination:
        """
        Get destination by ID.

        Raises:
            NotFoundError: If destination not found
        """
        document = await self.gateway.find_by_id(Destination.collection, destination_id)
        if not document:
            raise NotFoundError(resource_type="destination", resource_id=destination_id)
        return Destination.from_document(document)

    async def create_destination(self, payload: DestinationPayload) -> Destination:
        """
        Create a new destination.

        Raises:
            ValidationError: If name or location is missing, or rating/price is out of range
        """
        _raise_if_invalid(validate_destination(payload), "Destination failed validation")

        fields = payload.model_dump(exclude_none=True)
        destination = Destination(**fields)
        destination.id = await self.gateway.insert(Destination.collection, destination.to_document())

        logger.info(
            "Destination created",
            extra={"destination_id": destination.id, "destination_name": destination.name},
        )
        return destination

    async def update_destination(self, destination_id: str, payload: DestinationPayload) -> Destination:
        """
        Apply a partial update to a destination.

        Raises:
            ValidationError: If a supplied field is invalid
            NotFoundError: If destination not found
        """
        _raise_if_invalid(validate_destination(payload, partial=True), "Destination failed validation")

        changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        changes["updatedAt"] = utcnow()

        document = await self.gateway.update_by_id(Destination.collection, destination_id, changes)
        if not document:
            raise NotFoundError(resource_type="destination", resource_id=destination_id)

        logger.info(
            "Destination updated",
            extra={"destination_id": destination_id, "fields": sorted(changes)},
        )
        return Destination.from_document(document)

    async def delete_destination(self, destination_id: str) -> None:
        """
        Soft-delete a destination by clearing its active flag.

        Raises:
            NotFoundError: If destination not found
        """
        document = await self.gateway.update_by_id(
            Destination.collection,
            destination_id,
            {"isActive": False, "updatedAt": utcnow()},
        )
        if not document:
            raise NotFoundError(resource_type="destination", resource_id=destination_id)

        logger.info("Destination deactivated", extra={"destination_id": destination_id})
