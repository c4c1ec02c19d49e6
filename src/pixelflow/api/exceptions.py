"""
Exception handlers for the PixelFlow HTTP API.
Provides consistent error responses across all endpoints.
"""

import inspect
import logging
import traceback
from functools import wraps

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from pixelflow.exceptions import (
    ConfigurationException,
    LoadError,
    OutOfBoundsError,
    PixelFlowException,
    WriteError,
)

logger = logging.getLogger(__name__)


# HTTP status for each domain exception; anything else maps to 500
STATUS_CODES = {
    LoadError: status.HTTP_400_BAD_REQUEST,
    WriteError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OutOfBoundsError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationException: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: PixelFlowException) -> int:
    """Look up HTTP status for a domain exception (subclasses included)."""
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def pixelflow_exception_handler(request: Request, exc: PixelFlowException) -> JSONResponse:
    """
    Handler for PixelFlow domain exceptions.

    Args:
        request: FastAPI request
        exc: PixelFlowException instance

    Returns:
        JSON response with error details
    """
    logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"details": exc.details})

    return JSONResponse(
        status_code=status_code_for(exc),
        content={"error": exc.message, "details": exc.details, "type": exc.__class__.__name__},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handler for request validation errors."""
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"][1:]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(f"Validation error: {errors}")

    return JSONResponse(
        status_code=422,
        content={"error": "Validation failed", "details": errors, "type": "ValidationError"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler for unexpected exceptions.

    Stack traces are only included when the app runs in debug mode.
    """
    logger.error(f"Unexpected error: {exc}", exc_info=True)

    details = {}
    if getattr(request.app.state, "debug", False):
        details = {
            "exception": str(exc),
            "type": exc.__class__.__name__,
            "traceback": traceback.format_exc(),
        }

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": details, "type": "InternalError"},
    )


# Maps exception types to (status_code, error_message, log_level, detail_builder)
EXCEPTION_MAPPING = {
    ValidationError: (
        400,
        "Validation failed",
        "warning",
        lambda e: {"details": e.errors(include_context=False, include_input=False)},
    ),
    ValueError: (400, "Invalid value", "warning", lambda e: {"details": str(e)}),
}


def safe_endpoint(func):
    """
    Decorator to wrap endpoint functions with error handling.

    Domain exceptions and HTTPException pass through to the registered
    handlers; common built-in exceptions are mapped via EXCEPTION_MAPPING.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            if inspect.iscoroutinefunction(func):
                return await func(*args, **kwargs)
            return func(*args, **kwargs)

        except (PixelFlowException, HTTPException):
            raise

        except Exception as e:
            exception_type = type(e)
            if exception_type not in EXCEPTION_MAPPING:
                logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                raise

            status_code, error_msg, log_level, detail_builder = EXCEPTION_MAPPING[exception_type]
            log_message = f"{exception_type.__name__} in {func.__name__}: {e}"
            if log_level == "warning":
                logger.warning(log_message)
            else:
                logger.error(log_message)

            detail = {"error": error_msg}
            detail.update(detail_builder(e))
            raise HTTPException(status_code=status_code, detail=detail)

    return wrapper


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(PixelFlowException, pixelflow_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
