"""Application error taxonomy mapped to HTTP status codes."""
from typing import Any


class AppError(Exception):
    """Base for errors that carry their own HTTP status and client-safe message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(AppError):
    """Bad input shape or range. `errors` lists each offending field."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Single-field validation error; the field message doubles as the top-level message."""
        return cls(message, [{"field": field, "message": message}])

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class AuthError(AppError):
    """Missing, malformed, expired or otherwise invalid credential."""

    status_code = 401


class NotFoundError(AppError):
    """Unknown entity id."""

    status_code = 404
