"""Service-layer error taxonomy.

Routers translate these into HTTP responses (see ``lifeboard.utils.exceptions``).
"""


class ServiceError(Exception):
    """Base exception for service errors."""


class ValidationError(ServiceError):
    """Missing or malformed input (HTTP 400)."""


class NotFoundError(ServiceError):
    """Record is absent or not owned by the caller (HTTP 404)."""

    def __init__(self, resource: str, record_id: object | None = None) -> None:
        self.resource = resource
        self.record_id = record_id
        message = f"{resource} not found" if record_id is None else f"{resource} {record_id} not found"
        super().__init__(message)


class ConflictError(ServiceError):
    """Request conflicts with existing state (HTTP 409)."""


class DependencyError(ServiceError):
    """An external dependency (the AI service) failed or returned garbage."""

    def __init__(self, message: str, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable
