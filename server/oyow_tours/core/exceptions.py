"""
RFC 9457 Problem Details errors for the Oyow Tours API.

Every error leaving the API as ``application/problem+json`` is built here.
The destination endpoints are the exception: they answer with the
``{success, message}`` envelope and catch these errors themselves.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings

logger = logging.getLogger(__name__)

PROBLEM_BASE_URI = "https://oyowtours.example/problems"
PROBLEM_MEDIA_TYPE = "application/problem+json"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _incident() -> dict[str, str]:
    """Fields that let an operator find a 500 in the logs."""
    return {"error_id": str(uuid.uuid4()), "timestamp": _utc_timestamp()}


class ProblemDetailsException(HTTPException):
    """
    Base class for errors rendered as Problem Details.

    ``problem_details`` holds the response body; ``extensions`` are merged
    into it next to the standard members.
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        slug: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.title = title
        self.type_uri = f"{PROBLEM_BASE_URI}/{slug}" if slug else f"about:blank#{status_code}"
        self.instance = instance

        body: dict[str, Any] = {"type": self.type_uri, "title": title, "status": status_code}
        if detail:
            body["detail"] = detail
        if instance:
            body["instance"] = instance
        body.update(extensions or {})
        self.problem_details = body

        super().__init__(status_code=status_code, detail=body, headers=headers)


class ValidationError(ProblemDetailsException):
    """A request failed validation; ``violations`` lists ``{path, message}`` pairs."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        violations: Optional[list[dict[str, str]]] = None,
        instance: Optional[str] = None,
        title: str = "Validation Error",
        slug: str = "validation-error",
    ):
        self.violations = violations or []
        super().__init__(
            status_code=400,
            title=title,
            detail=detail,
            slug=slug,
            instance=instance,
            extensions={"violations": self.violations} if self.violations else None,
        )


class InvalidReferenceError(ValidationError):
    """A request names an entity, such as a tour, that does not exist."""

    def __init__(self, field: str, value: str, resource_type: str = "resource", instance: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(
            detail=f"Invalid {field}: no {resource_type} with ID '{value}'",
            violations=[{"path": field, "message": f"Unknown {resource_type} '{value}'"}],
            instance=instance,
            title="Invalid Reference",
            slug="invalid-reference",
        )


class NotFoundError(ProblemDetailsException):
    def __init__(self, resource_type: str = "resource", resource_id: Optional[str] = None, instance: Optional[str] = None):
        subject = f"{resource_type} with ID '{resource_id}'" if resource_id else resource_type
        extensions = {"resource_type": resource_type}
        if resource_id:
            extensions["resource_id"] = resource_id
        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=f"The requested {subject} could not be found",
            slug="resource-not-found",
            instance=instance,
            extensions=extensions,
        )


class StoreUnavailableError(ProblemDetailsException):
    """
    The document store could not serve a request.

    Raised for connection failures, server-selection timeouts, query errors
    and round trips exceeding the store timeout. Reads with a static
    substitute and best-effort writes catch it; other callers let it
    surface as a 500.
    """

    def __init__(self, operation: str, collection: str, reason: Optional[str] = None, instance: Optional[str] = None):
        self.operation = operation
        self.collection = collection
        self.reason = reason
        super().__init__(
            status_code=500,
            title="Store Unavailable",
            detail=f"The document store could not complete '{operation}' on '{collection}'",
            slug="store-unavailable",
            instance=instance,
            extensions=_incident(),
        )


class InternalServerError(ProblemDetailsException):
    def __init__(self, detail: str = "An unexpected error occurred while processing the request", instance: Optional[str] = None):
        super().__init__(
            status_code=500,
            title="Internal Server Error",
            detail=detail,
            slug="internal-server-error",
            instance=instance,
            extensions=_incident(),
        )


def _problem_response(status_code: int, body: dict[str, Any], headers: Optional[dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=headers, media_type=PROBLEM_MEDIA_TYPE)


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """Render a raised ProblemDetailsException, defaulting ``instance`` to the request path."""
    body = dict(exc.problem_details)
    body.setdefault("instance", request.url.path)
    return _problem_response(exc.status_code, body, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn body and query parsing failures, malformed JSON included, into a 400."""
    violations = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    problem = ValidationError(
        detail="The request could not be parsed",
        violations=violations,
        instance=request.url.path,
    )
    return _problem_response(problem.status_code, problem.problem_details)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the failure and answer a 500 that names its error ID."""
    problem = InternalServerError(instance=request.url.path)
    error_id = problem.problem_details["error_id"]

    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    body = dict(problem.problem_details)
    if not settings.is_production:
        body["error"] = repr(exc)
    return _problem_response(500, body)
