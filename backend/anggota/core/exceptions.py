"""Application exceptions rendered as JSON error responses.

Each exception knows its HTTP status and the body returned to the caller, so
route handlers raise and the handler registered in ``main`` renders.
"""
from __future__ import annotations

from typing import Any

from fastapi import status

VALIDATION_MESSAGE = "The given data was invalid."


class AnggotaError(Exception):
    """Base exception for all API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationFailed(AnggotaError):
    """Raised for field-level validation problems detected outside pydantic."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(VALIDATION_MESSAGE)

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationFailed:
        return cls({field: [message]})

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class UnauthenticatedError(AnggotaError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthenticated.") -> None:
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class InvalidCredentialsError(AnggotaError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class ForbiddenError(AnggotaError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Unauthorized. Only admins can perform this action.") -> None:
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class UserNotFoundError(AnggotaError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self) -> None:
        super().__init__("User not found.")


class PersistenceError(AnggotaError):
    """A write failed and its transaction was rolled back."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def validation_errors_from_pydantic(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic/FastAPI error entries into a ``{field: [messages]}`` map."""

    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = str(loc[-1]) if loc else "body"
        message = error.get("msg", "Invalid value")
        # model-level validators report on the model; they tag the field in ctx
        ctx = error.get("ctx") or {}
        if isinstance(ctx.get("field"), str):
            field = ctx["field"]
        grouped.setdefault(field, []).append(message)
    return grouped
