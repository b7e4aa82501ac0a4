"""
Shared degrade-on-failure helpers for the store.

``read_with_fallback`` serves a substitute when a read fails, returns
records that do not validate, or comes back empty. ``write_best_effort``
attempts a write and reports, rather than raises, a store failure. Both
log every degradation so it can be found and reconciled later.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from pydantic import ValidationError as DocumentValidationError

from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackReason:
    STORE_ERROR = "store_error"
    EMPTY = "empty"


async def read_with_fallback(
    read: Callable[[], Awaitable[Sequence[T]]],
    fallback: Callable[[], Sequence[T]],
    resource: str,
) -> tuple[list[T], Optional[str]]:
    """
    Run ``read``; return ``fallback()`` when it fails, yields an invalid
    record or returns nothing.

    Returns:
        The items and the fallback reason, or None when ``read`` served them.
    """
    try:
        items = list(await read())
    except StoreUnavailableError as e:
        logger.warning(
            "Store read failed, serving fallback data",
            extra={"resource": resource, "operation": e.operation, "reason": e.reason},
        )
        return list(fallback()), FallbackReason.STORE_ERROR
    except DocumentValidationError as e:
        logger.warning(
            "Stored records failed validation, serving fallback data",
            extra={"resource": resource, "errors": e.error_count(), "reason": str(e)},
        )
        return list(fallback()), FallbackReason.STORE_ERROR

    if not items:
        logger.warning("Store returned no records, serving fallback data", extra={"resource": resource})
        return list(fallback()), FallbackReason.EMPTY

    logger.info("Served records from store", extra={"resource": resource, "count": len(items)})
    return items, None


async def write_best_effort(
    write: Callable[[], Awaitable[str]],
    resource: str,
    payload: dict[str, Any],
) -> Optional[str]:
    """
    Run ``write`` and return the identifier it produced.

    On a store failure the full payload is logged at ERROR, as the only
    retained trace for manual recovery, and None is returned.
    """
    try:
        record_id = await write()
    except StoreUnavailableError as e:
        logger.error(
            "Store write failed, payload retained in log for manual recovery",
            extra={
                "resource": resource,
                "operation": e.operation,
                "reason": e.reason,
                "payload": payload,
            },
        )
        return None

    logger.info("Record persisted", extra={"resource": resource, "record_id": record_id})
    return record_id
