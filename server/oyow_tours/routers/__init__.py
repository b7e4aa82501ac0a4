"""FastAPI routers package."""

from .booking import router as booking_router
from .contact import router as contact_router
from .destination import router as destination_router
from .metrics import router as metrics_router
from .realtime import router as realtime_router
from .sos import router as sos_router
from .status import router as status_router
from .tour import router as tour_router

__all__ = [
    "booking_router",
    "contact_router",
    "destination_router",
    "metrics_router",
    "realtime_router",
    "sos_router",
    "status_router",
    "tour_router",
]
