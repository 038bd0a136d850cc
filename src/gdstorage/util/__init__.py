from .mime import FOLDER_MIME, UPLOAD_MIMES, mime_for_extension
from .naming import file_extension, upload_name
from .time import now_ns, parse_rfc3339

__all__ = [
    "FOLDER_MIME",
    "UPLOAD_MIMES",
    "mime_for_extension",
    "file_extension",
    "upload_name",
    "now_ns",
    "parse_rfc3339",
]
