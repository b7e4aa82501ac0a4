"""Request correlation and access logging middleware."""

import logging
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .observability import metrics_collector

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Scrapes and browser noise are neither logged nor counted
QUIET_PATHS = frozenset({"/metrics", "/favicon.ico"})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Correlate log lines with a request.

    Reuses the caller's ``X-Request-ID`` or mints one, binds it into the
    structlog context for the duration of the request and echoes it back.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log each request as it starts and completes, and feed the request metrics."""

    def __init__(self, app: ASGIApp, quiet_paths: frozenset = QUIET_PATHS):
        super().__init__(app)
        self.quiet_paths = quiet_paths

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    @staticmethod
    def _route_label(request: Request) -> str:
        # Route templates keep metric label cardinality bounded
        route = request.scope.get("route")
        return getattr(route, "path", request.url.path)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.quiet_paths:
            return await call_next(request)

        started = time.perf_counter()
        fields = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": self._client_ip(request),
        }
        logger.debug("Request started", extra=fields)

        try:
            response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - started
            metrics_collector.record_request(request.method, self._route_label(request), 500, duration)
            logger.error(
                "Request failed",
                extra={**fields, "status_code": 500, "duration_ms": round(duration * 1000, 2)},
            )
            raise

        duration = time.perf_counter() - started
        metrics_collector.record_request(request.method, self._route_label(request), response.status_code, duration)

        fields.update(status_code=response.status_code, duration_ms=round(duration * 1000, 2))
        if response.status_code >= 500:
            logger.error("Request completed", extra=fields)
        elif response.status_code >= 400:
            logger.warning("Request completed", extra=fields)
        else:
            logger.info("Request completed", extra=fields)
        return response


def setup_middleware(app, enable_logging: bool = True) -> None:
    """Install request middleware; the request ID wraps access logging so log lines carry it."""
    if enable_logging:
        app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
