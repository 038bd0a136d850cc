"""gdstorage public API."""

from __future__ import annotations

from gdstorage.auth import ClientHandle, ServiceAccountCredential, initialize
from gdstorage.config import StorageConfig
from gdstorage.errors import (
    ClientConnectionError,
    ConfigError,
    GDStorageError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalIOError,
    NotFoundError,
    RemoteError,
    UnsupportedTypeError,
    map_http_error,
)
from gdstorage.models import BatchResult, StepResult, StoredFile, UploadRequest
from gdstorage.storage import DriveStorage, get_url

__all__ = [
    # High-level
    "DriveStorage",
    "get_url",
    # Config / Auth
    "StorageConfig",
    "ClientHandle",
    "ServiceAccountCredential",
    "initialize",
    # Models
    "StoredFile",
    "UploadRequest",
    "StepResult",
    "BatchResult",
    # Errors
    "GDStorageError",
    "ConfigError",
    "LocalIOError",
    "ClientConnectionError",
    "UnsupportedTypeError",
    "InvalidArgumentError",
    "RemoteError",
    "NotFoundError",
    "HttpErrorInfo",
    "map_http_error",
]
