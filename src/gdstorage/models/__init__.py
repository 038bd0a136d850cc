"""Public model exports for gdstorage."""

from __future__ import annotations

from .results import BatchResult, BatchStatus, StepResult, StepStatus
from .stored_file import StoredFile, stored_file_from_response
from .upload import UploadRequest

__all__ = [
    "StoredFile",
    "stored_file_from_response",
    "UploadRequest",
    "StepStatus",
    "BatchStatus",
    "StepResult",
    "BatchResult",
]
