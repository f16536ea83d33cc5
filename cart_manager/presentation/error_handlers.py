"""Centralized error handling for the presentation layer."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..domain.exceptions import DomainError, ValidationError
from ..domain.results import CartFailureReason

# HTTP status for each refused add-to-cart request
FAILURE_STATUS_CODES: dict[CartFailureReason, int] = {
    CartFailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CartFailureReason.OUT_OF_STOCK: status.HTTP_409_CONFLICT,
    CartFailureReason.MAX_QUANTITY_REACHED: status.HTTP_409_CONFLICT,
}


def handle_domain_error(error: DomainError, request: Request) -> JSONResponse:
    """Convert domain errors to appropriate HTTP responses."""
    if isinstance(error, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(error), "instance": str(request.url.path)},
    )


def handle_unexpected_error(request: Request, detail: str) -> JSONResponse:
    """Build the generic 500 response for database and unexpected errors."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail, "instance": str(request.url.path)},
    )
