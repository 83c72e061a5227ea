"""
Error taxonomy returned by use cases.

The API layer maps each code to exactly one HTTP status:
NOT_FOUND 404, ACCESS_DENIED 403, VALIDATION_ERROR 400,
LIMIT_EXCEEDED 409, CONFLICT 409, STORE_FAILURE 500.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional

from libs.result import Error

NOT_FOUND = "NOT_FOUND"
ACCESS_DENIED = "ACCESS_DENIED"
VALIDATION_ERROR = "VALIDATION_ERROR"
LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
CONFLICT = "CONFLICT"
STORE_FAILURE = "STORE_FAILURE"


def not_found(entity: str) -> Error:
    return Error(NOT_FOUND, f"{entity} not found")


def access_denied() -> Error:
    # Uniform message: which rule fired is never revealed
    return Error(ACCESS_DENIED, "Access denied")


def validation_error(message: str, details: Optional[Dict[str, Any]] = None) -> Error:
    return Error(VALIDATION_ERROR, message, details)


def conflict(message: str) -> Error:
    return Error(CONFLICT, message)


def limit_exceeded(resource: str, current: int, limit: int) -> Error:
    return Error(
        LIMIT_EXCEEDED,
        f"{resource.capitalize()} limit ({limit}) reached for this tenant",
        {"resource": resource, "current": current, "limit": limit},
    )


def invalid_choice(field: str, choices: Iterable[Enum]) -> Error:
    allowed = ", ".join(member.value for member in choices)
    return Error(VALIDATION_ERROR, f"Invalid {field}. Allowed values: {allowed}")


# Authentication codes (login only)
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
TENANT_INACTIVE = "TENANT_INACTIVE"
USER_INACTIVE = "USER_INACTIVE"
UNAUTHORIZED = "UNAUTHORIZED"
