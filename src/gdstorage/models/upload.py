"""Upload request model."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable

from gdstorage.errors import LocalIOError


@dataclass(slots=True, frozen=True)
class UploadRequest:
    """
    One file to upload.

    Attributes:
        name: Display name chosen by the caller (not the real file name).
        filename: Original file name; only its extension is used.
        opener: Returns a fresh readable binary stream for the content.
    """

    name: str
    filename: str
    opener: Callable[[], BinaryIO]

    @classmethod
    def from_path(cls, name: str, path: str | os.PathLike[str]) -> "UploadRequest":
        path_str = os.fspath(path)
        return cls(
            name=name,
            filename=os.path.basename(path_str),
            opener=lambda: open(path_str, "rb"),
        )

    @classmethod
    def from_bytes(cls, name: str, filename: str, data: bytes) -> "UploadRequest":
        return cls(name=name, filename=filename, opener=lambda: io.BytesIO(data))

    def open(self) -> BinaryIO:
        """Open the source stream, raising LocalIOError on failure."""
        try:
            return self.opener()
        except OSError as exc:
            raise LocalIOError(
                f"Unable to open source file {self.filename}",
                details={"filename": self.filename},
                cause=exc,
            ) from exc
