"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "webViewLink,"
    "mimeType,"
    "createdTime"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

CREATE_FIELDS: str = "id,name"

PUBLIC_URL_TEMPLATE: str = "https://drive.google.com/uc?id={file_id}"
