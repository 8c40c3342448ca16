"""Errors the HTTP layer turns into ``{"success": false, "error": ...}`` bodies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping

from werkzeug.exceptions import HTTPException


@dataclass(slots=True)
class AppError(Exception):
    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Rejected request: a bad payload or an expression the calculator refuses.

    Calculator failures pass their own ``calc.*`` code.
    """

    code: str = "calc.invalid_request"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    message: str = "Resource not found"
    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class HttpAppError(AppError):
    code: str = "http_error"

    @classmethod
    def from_exception(cls, error: HTTPException) -> "HttpAppError":
        return cls(message=error.description or error.name, status_code=error.code or 500)


@dataclass(slots=True)
class InternalAppError(AppError):
    message: str = "Internal server error"
    code: str = "internal_error"
    status_code: int = 500


def ensure_app_error(error: Exception) -> AppError:
    """Map ``error`` onto an :class:`AppError`; unknown failures become a bare 500."""

    if isinstance(error, AppError):
        return error
    if isinstance(error, HTTPException):
        return HttpAppError.from_exception(error)
    return InternalAppError()


__all__ = [
    "AppError",
    "HttpAppError",
    "InternalAppError",
    "NotFoundAppError",
    "ValidationAppError",
    "ensure_app_error",
]
