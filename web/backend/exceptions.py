#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500
    retryable = False


class InvalidRequestException(ServiceException):
    """Raised for malformed input, before any repository access."""
    status_code = 400


class UserNotFoundException(ServiceException):
    """Raised when the requesting user does not exist."""
    status_code = 404


class DependencyUnavailableException(ServiceException):
    """Raised when the database cannot be reached; the client may retry."""
    status_code = 503
    retryable = True


def _error_body(error: str, error_type: str, retryable: bool = False) -> dict:
    content = {
        "success": False,
        "error": error,
        "type": error_type
    }
    if retryable:
        content["retryable"] = True
    return content


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc), exc.__class__.__name__, exc.retryable)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTPException")
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed path/query/body values are client errors (400)."""
    fields = ", ".join(".".join(str(part) for part in err.get("loc", ())) for err in exc.errors())
    return JSONResponse(
        status_code=400,
        content=_error_body(f"Invalid request parameters: {fields}", InvalidRequestException.__name__)
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", "InternalError")
    )
