"""Maps domain exceptions onto HTTP responses shaped ``{"error": message}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    AuthorizationError,
    AvailabilityError,
    ConfigurationError,
    DomainException,
    NotFoundError,
    SignatureError,
    UpstreamFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins, so subclasses must precede their bases.
STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (SignatureError, status.HTTP_400_BAD_REQUEST),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AvailabilityError, status.HTTP_409_CONFLICT),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UpstreamFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: DomainException) -> int:
    for exc_type, code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"error": message})


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    code = status_for(exc)
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error on %s: %s", request.url.path, exc)
        return error_response(code, "Server not configured.")
    if code >= 500:
        logger.error("Upstream failure on %s: %s", request.url.path, exc)
    return error_response(code, str(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(
        status.HTTP_400_BAD_REQUEST, f"{where}: {message}" if where else message
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
