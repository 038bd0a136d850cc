from __future__ import annotations

from gdstorage.errors import UnsupportedTypeError

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Only images are accepted for upload.
UPLOAD_MIMES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}


def mime_for_extension(ext: str) -> str:
    """
    Return the upload MIME type for a file extension (case-insensitive).

    Raises:
        UnsupportedTypeError: if the extension is not an accepted image type.
    """
    mime_type = UPLOAD_MIMES.get(ext.lower())
    if mime_type is None:
        raise UnsupportedTypeError(
            f"Unable to store files with type {ext}",
            details={"extension": ext},
        )
    return mime_type
