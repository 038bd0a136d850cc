"""Local projection of Drive files and folders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from gdstorage.errors import RemoteError
from gdstorage.util.time import parse_rfc3339


@dataclass(slots=True, frozen=True)
class StoredFile:
    """
    Metadata of a Drive item as returned by the API.

    Notes:
        - `id` is assigned by Drive and never changes.
        - Items returned by folder creation only carry `id` and `name`.
    """

    id: str
    name: str
    url: str = ""
    mime_type: str = ""
    created_at: Optional[datetime] = None


def stored_file_from_response(data: dict[str, Any]) -> StoredFile:
    """
    Project a Drive `files` resource onto a StoredFile.

    Raises:
        RemoteError: if `createdTime` is missing or not RFC3339.
    """
    created = data.get("createdTime")
    try:
        created_at = parse_rfc3339(created)  # type: ignore[arg-type]
    except ValueError as exc:
        raise RemoteError(
            "Drive returned an invalid createdTime",
            details={"file_id": data.get("id"), "createdTime": created},
            cause=exc,
        ) from exc

    return StoredFile(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        url=str(data.get("webViewLink", "")),
        mime_type=str(data.get("mimeType", "")),
        created_at=created_at,
    )
