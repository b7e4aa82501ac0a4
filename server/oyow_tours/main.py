"""Oyow Tours API application factory and entrypoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import close_store, init_store
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
)
from .core.middleware import REQUEST_ID_HEADER, setup_middleware
from .core.observability import (
    SERVICE_NAME,
    instrument_fastapi,
    instrument_pymongo,
    setup_structured_logging,
    setup_tracing,
)
from .routers import (
    booking_router,
    contact_router,
    destination_router,
    metrics_router,
    realtime_router,
    sos_router,
    status_router,
    tour_router,
)
from .services.relay import RelayHub

setup_structured_logging()
setup_tracing(SERVICE_NAME)

logger = logging.getLogger(__name__)

ROUTERS = (
    status_router,
    tour_router,
    booking_router,
    contact_router,
    sos_router,
    destination_router,
    realtime_router,
    metrics_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Open the document store for the life of the process.

    An unreachable store does not stop startup; tour listings then come
    from the static catalog and submissions are accepted unsaved.
    """
    instrument_pymongo()

    client, gateway = await init_store(settings)
    app.state.store_client = client
    app.state.gateway = gateway
    logger.info("Oyow Tours API started", extra={"environment": settings.environment, "port": settings.port})

    try:
        yield
    finally:
        await close_store(client)
        logger.info("Oyow Tours API stopped")


def create_app() -> FastAPI:
    """Build the application with its own relay hub, middleware, error handlers and routes."""
    app = FastAPI(
        title="Oyow Tours API",
        description="Tours, bookings, contact and destinations with store fallback, plus a realtime SOS relay",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.relay = RelayHub()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    setup_middleware(app)
    instrument_fastapi(app)

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oyow_tours.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
