"""Tour service: store-backed tour reads that degrade to the static catalog."""

import logging
from typing import Optional

from pydantic import ValidationError as DocumentValidationError

from ..core.database import PersistenceGateway
from ..core.exceptions import NotFoundError, StoreUnavailableError
from ..core.observability import metrics_collector
from ..models.tour import Tour
from .catalog import catalog_tours, find_catalog_tour
from .fallback import read_with_fallback

logger = logging.getLogger(__name__)


class TourService:
    """Service for tour-related operations."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def _find_active(self) -> list[Tour]:
        documents = await self.gateway.find_many(Tour.collection, {"isActive": True})
        return [Tour.from_document(document) for document in documents]

    async def list_tours(self) -> list[Tour]:
        """
        List active tours.

        Falls back to the static catalog when the store fails or holds no
        active tours; an empty collection therefore looks like a degraded
        store to the caller.

        Returns:
            Active tours from the store, or the catalog tours
        """
        tours, fallback_reason = await read_with_fallback(self._find_active, catalog_tours, "tours")
        if fallback_reason:
            metrics_collector.record_catalog_fallback(fallback_reason)
        return tours

    async def get_tour_by_id(self, tour_id: str) -> Optional[Tour]:
        """
        Get tour by ID from the store.

        Args:
            tour_id: Tour ID to search for

        Returns:
            Tour if found, None otherwise

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        document = await self.gateway.find_by_id(Tour.collection, tour_id)
        return Tour.from_document(document) if document else None

    async def get_tour_by_id_or_raise(self, tour_id: str) -> Tour:
        """
        Get tour by ID or raise NotFoundError.

        A store failure is not degraded here: there is no safe static
        substitute for a lookup by identifier.

        Raises:
            NotFoundError: If tour not found
            StoreUnavailableError: If the store cannot be queried
        """
        tour = await self.get_tour_by_id(tour_id)
        if not tour:
            logger.warning("Tour not found", extra={"tour_id": tour_id})
            raise NotFoundError(resource_type="tour", resource_id=tour_id)
        return tour

    async def resolve_tour(self, tour_id: str) -> Optional[Tour]:
        """
        Find a tour in the store, then in the static catalog.

        A store failure counts as "not in the store" so that bookings for
        catalog tours keep working while the store is down.
        """
        try:
            tour = await self.get_tour_by_id(tour_id)
        except StoreUnavailableError as e:
            logger.warning(
                "Store lookup failed while resolving tour, trying static catalog",
                extra={"tour_id": tour_id, "reason": e.reason},
            )
            tour = None
        except DocumentValidationError as e:
            logger.warning(
                "Stored tour failed validation while resolving, trying static catalog",
                extra={"tour_id": tour_id, "errors": e.error_count()},
            )
            tour = None

        if tour is None:
            tour = find_catalog_tour(tour_id)
            if tour is not None:
                logger.info("Tour resolved from static catalog", extra={"tour_id": tour_id})
        return tour
