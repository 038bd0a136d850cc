"""Exception hierarchy and HTTP error mapping for gdstorage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDStorageError(Exception):
    """
    Base exception for gdstorage.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigError(GDStorageError):
    """Raised when configuration or credential data is missing or invalid."""


class LocalIOError(GDStorageError):
    """Raised when a local file cannot be read, written or inspected."""


class ClientConnectionError(GDStorageError):
    """Raised when the Drive client cannot be constructed."""


class UnsupportedTypeError(GDStorageError):
    """Raised when a file extension is not accepted for upload."""


class InvalidArgumentError(GDStorageError):
    """Raised when caller input is unusable (e.g., filename without extension)."""


class RemoteError(GDStorageError):
    """Raised for failures reported by the Drive API."""


class NotFoundError(RemoteError):
    """Raised when a Drive resource does not exist."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdstorage exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


NOT_FOUND_REASON = "notFound"


def is_not_found(info: HttpErrorInfo) -> bool:
    """Drive reports missing items with the terminal reason code 'notFound'."""
    if info.reason == NOT_FOUND_REASON:
        return True
    return info.status_code == 404


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteError:
    """
    Map an HTTP error to a gdstorage exception.

    Policy:
        - reason 'notFound' or 404 -> NotFoundError
        - otherwise -> RemoteError (message kept verbatim)
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if is_not_found(info):
        return NotFoundError(message, details=details, cause=cause)
    return RemoteError(message, details=details, cause=cause)
