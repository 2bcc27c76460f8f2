"""Global exception handlers for consistent error responses.

Every failure leaves the API as ``{"error": "<message>"}`` with a non-2xx
status:

- ValidationAppError → 400 (missing or too many symbols)
- QuoteSourceAppError → 502 (upstream quote source failed)
- Unexpected Exception → 500 (safety net, generic message)

The request id is never part of the body; clients read it from the
response header set by the middleware.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import AppError, QuoteSourceAppError, ValidationAppError
from app.core.logging import get_request_id

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def status_for(exc: AppError) -> int:
    """Map a domain error to its HTTP status code."""
    if isinstance(exc, ValidationAppError):
        return 400
    if isinstance(exc, QuoteSourceAppError):
        return 502
    return 500


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    Details are logged for diagnostics but only ``exc.message`` is returned.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code.
    """
    status_code = status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "error_details": exc.details or {},
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the exception type and message, returns a generic message so no
    internals reach the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
