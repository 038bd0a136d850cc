"""Public storage exports for gdstorage."""

from __future__ import annotations

from .drive_storage import DriveStorage, get_url

__all__ = ["DriveStorage", "get_url"]
