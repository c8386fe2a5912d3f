"""Router helpers."""

from .exceptions import SERVICE_ERROR_STATUS, raise_for_service_error

__all__ = ["SERVICE_ERROR_STATUS", "raise_for_service_error"]
