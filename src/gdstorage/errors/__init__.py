"""Public error exports for gdstorage."""

from __future__ import annotations

from .exceptions import (
    ClientConnectionError,
    ConfigError,
    GDStorageError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalIOError,
    NotFoundError,
    RemoteError,
    UnsupportedTypeError,
    is_not_found,
    map_http_error,
)

__all__ = [
    "GDStorageError",
    "ConfigError",
    "LocalIOError",
    "ClientConnectionError",
    "UnsupportedTypeError",
    "InvalidArgumentError",
    "RemoteError",
    "NotFoundError",
    "HttpErrorInfo",
    "is_not_found",
    "map_http_error",
]
