"""Error types carried back to API clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }


@dataclass(slots=True)
class ValidationAppError(AppError):
    """The request payload itself is malformed."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class UnprocessableAppError(AppError):
    """The payload is well formed but its content cannot be processed."""

    code: str = "unprocessable"
    status_code: int = 422


@dataclass(slots=True)
class NotFoundAppError(AppError):
    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class InternalAppError(AppError):
    """Generic internal error wrapper to avoid leaking implementation details."""

    code: str = "internal_error"
    status_code: int = 500


def ensure_app_error(error: AppError | Exception, *, fallback_code: str = "internal_error") -> AppError:
    """Coerce arbitrary exceptions into :class:`AppError` instances.

    Unknown exceptions are reported with a generic message; the original text
    stays in the server log only.
    """

    if isinstance(error, AppError):
        return error
    return InternalAppError(code=fallback_code, message="Internal server error")


__all__ = [
    "AppError",
    "InternalAppError",
    "NotFoundAppError",
    "UnprocessableAppError",
    "ValidationAppError",
    "ensure_app_error",
]
