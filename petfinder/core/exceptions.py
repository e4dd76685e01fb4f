"""
Domain exceptions mapped to HTTP status codes.

Every error response body is ``{"error": <message>}`` with an optional
``details`` string; the handlers live in ``petfinder.main``.
"""

from collections.abc import Iterable
from typing import Any

from fastapi import status


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """pydantic error list -> 'body.pet_name: Field required; ...'."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}" if location else error.get("msg", "invalid"))
    return "; ".join(parts)


class PetFinderError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        details: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(PetFinderError):
    """Missing or malformed required field."""

    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateEmailError(PetFinderError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class UnauthorizedError(PetFinderError):
    """No credentials, or credentials that do not match a user."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(PetFinderError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(PetFinderError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(PetFinderError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error", details: str | None = None):
        super().__init__(message, details)
