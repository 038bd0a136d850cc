"""Public auth exports for gdstorage."""

from __future__ import annotations

from .bootstrap import ClientHandle, build_drive_service, initialize, sync_credential_cache
from .credential import ServiceAccountCredential

__all__ = [
    "ClientHandle",
    "ServiceAccountCredential",
    "build_drive_service",
    "initialize",
    "sync_credential_cache",
]
