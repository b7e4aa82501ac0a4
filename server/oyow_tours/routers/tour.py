"""Tour router: listing with catalog fallback and lookup by ID."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import Tours
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.tour import Tour
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tours", tags=["tours"])


@router.get("", response_model=list[Tour], response_model_by_alias=True)
async def list_tours(tour_service: TourService = Tours) -> JSONResponse:
    """
    List active tours.

    Always answers 200: when the store is down or empty the static
    catalog is returned instead.
    """
    tours = await tour_service.list_tours()
    return JSONResponse(status_code=200, content=[tour.to_response() for tour in tours])


@router.get("/{tour_id}", response_model=Tour, response_model_by_alias=True)
async def get_tour(tour_id: str, tour_service: TourService = Tours) -> JSONResponse:
    """Get a single tour from the store; 404 when absent, 500 when the store fails."""
    try:
        tour = await tour_service.get_tour_by_id_or_raise(tour_id)
    except ProblemDetailsException:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error fetching tour",
            extra={"tour_id": tour_id, "error": str(e)},
            exc_info=True,
        )
        raise InternalServerError(detail="Failed to fetch tour")

    return JSONResponse(status_code=200, content=tour.to_response())
