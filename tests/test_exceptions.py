"""Tests for service error translation."""

import pytest
from fastapi import HTTPException

from lifeboard.services.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from lifeboard.utils import raise_for_service_error


@pytest.mark.parametrize(
    ("error", "status_code", "detail"),
    [
        (ValidationError("Start date and end date are required"), 400, "Start date and end date are required"),
        (NotFoundError("Habit", "123"), 404, "Habit not found"),
        (ConflictError("An active budget already exists for food"), 409, "An active budget already exists for food"),
    ],
)
def test_service_errors_map_to_http(error, status_code, detail):
    with pytest.raises(HTTPException) as exc_info:
        raise_for_service_error(error)
    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == detail
    assert exc_info.value.__cause__ is error


def test_unmapped_error_propagates():
    error = DependencyError("AI down")
    with pytest.raises(DependencyError):
        raise_for_service_error(error)
