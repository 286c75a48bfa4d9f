"""Translation of storage failures into HTTP responses.

Every route wraps its storage call in :func:`storage_errors`; the single
handler registered for :class:`GatewayError` decides how the failure is
rendered. Changing the status policy (e.g. 404 for missing blobs) only
touches this module.
"""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from image_gateway.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """A storage operation failed while serving a request."""

    def __init__(self, message: str, error: str):
        super().__init__(message)
        self.message = message
        self.error = error


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """Re-raise any failure inside the block as a GatewayError.

    Args:
        message: Operation-level description shown to the caller.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"{message}: {e}")
        raise GatewayError(message, str(e)) from e


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render a GatewayError as HTTP 500 with ``{message, error}``."""
    body = ErrorResponse(message=exc.message, error=exc.error)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )
