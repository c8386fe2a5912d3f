"""Translation of service-layer errors into HTTP responses."""

from typing import NoReturn

from fastapi import HTTPException, status

from lifeboard.services.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

SERVICE_ERROR_STATUS: dict[type[ServiceError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def raise_for_service_error(exc: ServiceError) -> NoReturn:
    """Re-raise ``exc`` as the matching HTTPException.

    Errors without a mapping (e.g. DependencyError) propagate unchanged and
    reach the global 500 handler.
    """
    for error_type, status_code in SERVICE_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            detail = f"{exc.resource} not found" if isinstance(exc, NotFoundError) else str(exc)
            raise HTTPException(status_code=status_code, detail=detail) from exc
    raise exc
