from __future__ import annotations

import ntpath
import posixpath
from typing import Optional

from gdstorage.errors import InvalidArgumentError

from .time import now_ns


def file_extension(filename: str) -> str:
    """
    Return the text after the last dot of the base name.

    Raises:
        InvalidArgumentError: if the base name has no dot at all.
    """
    base = ntpath.basename(posixpath.basename(filename or ""))
    if "." not in base:
        raise InvalidArgumentError(
            f"Unable to read extension of file {filename!r}",
            details={"filename": filename},
        )
    return base.rpartition(".")[2]


def upload_name(name: str, ext: str, *, timestamp_ns: Optional[int] = None) -> str:
    """Build '<name>_<nanoseconds>.<ext>'."""
    stamp = now_ns() if timestamp_ns is None else timestamp_ns
    return f"{name}_{stamp}.{ext}"
