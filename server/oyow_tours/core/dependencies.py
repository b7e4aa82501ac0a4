"""FastAPI dependencies for the store gateway, services and the relay."""

from fastapi import Depends, Request
from starlette.requests import HTTPConnection

from ..services.booking_service import BookingService
from ..services.contact_service import ContactService
from ..services.destination_service import DestinationService
from ..services.relay import RelayHub
from ..services.tour_service import TourService
from .database import PersistenceGateway
from .exceptions import InternalServerError


def get_gateway(request: Request) -> PersistenceGateway:
    """
    Return the gateway created by the application lifespan.

    Raises:
        InternalServerError: If the application started without a store gateway
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise InternalServerError(detail="Document store gateway is not initialized")
    return gateway


def get_relay(connection: HTTPConnection) -> RelayHub:
    """Return the relay hub owned by the application."""
    return connection.app.state.relay


def get_tour_service(gateway: PersistenceGateway = Depends(get_gateway)) -> TourService:
    return TourService(gateway)


def get_booking_service(gateway: PersistenceGateway = Depends(get_gateway)) -> BookingService:
    return BookingService(gateway)


def get_contact_service(gateway: PersistenceGateway = Depends(get_gateway)) -> ContactService:
    return ContactService(gateway)


def get_destination_service(gateway: PersistenceGateway = Depends(get_gateway)) -> DestinationService:
    return DestinationService(gateway)


Gateway = Depends(get_gateway)
Relay = Depends(get_relay)
Tours = Depends(get_tour_service)
Bookings = Depends(get_booking_service)
Contacts = Depends(get_contact_service)
Destinations = Depends(get_destination_service)
