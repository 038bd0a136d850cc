"""Google Drive storage client for application folders and image uploads."""

from __future__ import annotations

import contextlib
import json
import logging
from typing import Any, BinaryIO, Callable, Optional, Sequence, TypeVar

from gdstorage.auth import ClientHandle, ServiceAccountCredential
from gdstorage.config import ENV_ORGANIZER_EMAIL, StorageConfig
from gdstorage.errors import (
    ClientConnectionError,
    ConfigError,
    GDStorageError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    RemoteError,
    map_http_error,
)
from gdstorage.models import (
    BatchResult,
    StoredFile,
    UploadRequest,
    stored_file_from_response,
)
from gdstorage.models.results import (
    StepResult,
    build_batch_result,
    failed_step,
    skipped_step,
    success_step,
)
from gdstorage.util.mime import FOLDER_MIME, mime_for_extension
from gdstorage.util.naming import file_extension, upload_name

from .fields import CREATE_FIELDS, FILE_FIELDS, LIST_FIELDS, PUBLIC_URL_TEMPLATE

T = TypeVar("T")

logger = logging.getLogger(__name__)

ROOT_FOLDER_ID = "root"


def get_url(file_id: str) -> str:
    """Return the public download URL of a Drive file (no API call)."""
    if not isinstance(file_id, str) or not file_id:
        raise InvalidArgumentError("file_id must be a non-empty string")
    return PUBLIC_URL_TEMPLATE.format(file_id=file_id)


class DriveStorage:
    """
    Application storage on Google Drive.

    Notes:
        - Every method issues blocking Drive API calls; nothing is cached.
        - Batch methods stop at the first failure and never roll back.
    """

    def __init__(self, handle: ClientHandle, config: StorageConfig) -> None:
        self._service = handle.service
        self._credential: Optional[ServiceAccountCredential] = handle.credential
        self._config = config

    @classmethod
    def from_service(
        cls,
        service: Any,
        config: StorageConfig,
        *,
        credential: Optional[ServiceAccountCredential] = None,
    ) -> "DriveStorage":
        """Create storage from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._service = service
        obj._credential = credential
        obj._config = config
        return obj

    # ----------------------------
    # Folders
    # ----------------------------
    def list_app_folders(self) -> list[StoredFile]:
        """List application folders directly under the Drive root."""
        marker = _escape_query_value(self._config.app_folder_marker)
        q = (
            f"'{ROOT_FOLDER_ID}' in parents"
            f" and mimeType='{FOLDER_MIME}'"
            f" and name contains '{marker}'"
            " and trashed=false"
        )
        return self._find_by_query(q)

    def app_folder_name(self) -> str:
        """Return 'storage_<project_id>_<app_name>'."""
        project_id = self._config.resolve_project_id(self._credential)
        if not project_id:
            raise ConfigError("Missing project id for app folder name")
        if not self._config.app_name:
            raise ConfigError("Missing APP_NAME for app folder name")
        return f"{self._config.app_folder_marker}{project_id}_{self._config.app_name}"

    def create_app_folder(self) -> StoredFile:
        """
        Create the application folder under the Drive root.

        The folder is readable by anyone and writable by the organizer email.
        If granting a permission fails the folder is deleted again before the
        error is raised.

        Returns:
            StoredFile with only `id` and `name` set.

        Raises:
            ConfigError: no organizer email, project id or app name.
            RemoteError: creation or permission grant failed.
        """
        email = self._config.organizer_email
        if not email:
            raise ConfigError(
                f"Missing {ENV_ORGANIZER_EMAIL} in configuration",
                details={"env": ENV_ORGANIZER_EMAIL},
            )
        name = self.app_folder_name()

        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [ROOT_FOLDER_ID]}
        req = self._service.files().create(body=body, fields=CREATE_FIELDS)
        data = self._execute(req.execute)
        folder_id = str(data.get("id", ""))
        logger.info("Created app folder %s (%s)", name, folder_id)

        try:
            self._create_permission(folder_id, {"type": "anyone", "role": "reader"})
            self._create_permission(
                folder_id,
                {"type": "user", "role": "writer", "emailAddress": email},
            )
        except GDStorageError as exc:
            self._discard_folder(folder_id, exc)
            raise

        return StoredFile(id=folder_id, name=str(data.get("name", name)))

    def get_folder(self, folder_id: str) -> Optional[StoredFile]:
        """
        Fetch a folder (or any item) by id.

        Returns:
            The StoredFile, or None when Drive reports it as not found.

        Raises:
            RemoteError: for any other failure.
        """
        req = self._service.files().get(fileId=folder_id, fields=FILE_FIELDS)
        try:
            data = self._execute(req.execute)
        except NotFoundError:
            logger.debug("Folder not found: %s", folder_id)
            return None
        return stored_file_from_response(data)

    # ----------------------------
    # Files
    # ----------------------------
    def store_file(self, request: UploadRequest, parent_id: str) -> str:
        """
        Upload one image into `parent_id`.

        Returns:
            The new Drive file id.

        Raises:
            NotFoundError: parent folder does not exist.
            InvalidArgumentError: source filename has no extension.
            UnsupportedTypeError: extension is not jpg/jpeg/png.
            LocalIOError: source stream cannot be opened.
            RemoteError: upload failed.
        """
        parent = self._require_parent(parent_id)
        name, mime_type = _upload_target(request)

        with contextlib.closing(request.open()) as stream:
            return self._upload(stream, name, mime_type, parent.id)

    def store_files(self, requests: Sequence[UploadRequest], parent_id: str) -> BatchResult:
        """
        Upload several images into `parent_id`, sequentially and in order.

        All sources are opened before anything is uploaded; if one cannot be
        opened nothing is uploaded. During upload the first failure stops the
        batch; files already uploaded stay on Drive.

        Raises:
            NotFoundError: parent folder does not exist.
        """
        parent = self._require_parent(parent_id)
        items = list(requests)
        results: list[StepResult] = []

        with contextlib.ExitStack() as stack:
            streams: list[BinaryIO] = []
            for index, request in enumerate(items):
                try:
                    streams.append(stack.enter_context(contextlib.closing(request.open())))
                except GDStorageError as exc:
                    logger.warning("Unable to open %s; nothing uploaded", request.filename)
                    results = [
                        failed_step(i, r.filename, exc) if i == index else skipped_step(i, r.filename)
                        for i, r in enumerate(items)
                    ]
                    return build_batch_result(results, error=exc)

            for index, (request, stream) in enumerate(zip(items, streams)):
                try:
                    name, mime_type = _upload_target(request)
                    file_id = self._upload(stream, name, mime_type, parent.id)
                except GDStorageError as exc:
                    logger.warning(
                        "Upload stopped at item %d (%s): %s", index, request.filename, exc
                    )
                    results.append(failed_step(index, request.filename, exc))
                    results.extend(
                        skipped_step(i, r.filename)
                        for i, r in enumerate(items[index + 1:], start=index + 1)
                    )
                    return build_batch_result(results, error=exc)
                results.append(success_step(index, request.filename, file_id))

        return build_batch_result(results)

    def delete_file(self, file_id: str) -> None:
        """
        Permanently delete a file.

        Raises:
            NotFoundError: Drive has no such file.
            RemoteError: any other failure.
        """
        req = self._service.files().delete(fileId=file_id)
        try:
            self._execute(req.execute)
        except NotFoundError as exc:
            raise NotFoundError(
                f"Unable to find file with ID {file_id}",
                details={**exc.details, "file_id": file_id},
                cause=exc.cause,
            ) from exc
        logger.info("Deleted file %s", file_id)

    def delete_files(self, file_ids: Sequence[str]) -> BatchResult:
        """Delete files sequentially; stop at the first failure (no rollback)."""
        ids = list(file_ids)
        results: list[StepResult] = []

        for index, file_id in enumerate(ids):
            try:
                self.delete_file(file_id)
            except GDStorageError as exc:
                logger.warning("Delete stopped at item %d (%s): %s", index, file_id, exc)
                results.append(failed_step(index, file_id, exc))
                results.extend(
                    skipped_step(i, fid)
                    for i, fid in enumerate(ids[index + 1:], start=index + 1)
                )
                return build_batch_result(results, error=exc)
            results.append(success_step(index, file_id, file_id))

        return build_batch_result(results)

    # ----------------------------
    # Internals
    # ----------------------------
    def _require_parent(self, parent_id: str) -> StoredFile:
        parent = self.get_folder(parent_id)
        if parent is None:
            raise NotFoundError(
                f"Unable to find parent directory with id of: {parent_id}",
                details={"parent_id": parent_id},
            )
        return parent

    def _upload(self, stream: BinaryIO, name: str, mime_type: str, parent_id: str) -> str:
        try:
            from googleapiclient.http import MediaIoBaseUpload
        except Exception as exc:  # pragma: no cover
            raise ClientConnectionError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        media = MediaIoBaseUpload(stream, mimetype=mime_type, resumable=True)
        body = {"name": name, "mimeType": mime_type, "parents": [parent_id]}
        req = self._service.files().create(body=body, media_body=media, fields="id")
        data = self._execute(req.execute)
        file_id = str(data.get("id", ""))
        logger.info("Uploaded %s to %s (%s)", name, parent_id, file_id)
        return file_id

    def _create_permission(self, file_id: str, body: dict[str, str]) -> None:
        req = self._service.permissions().create(fileId=file_id, body=body, fields="id")
        self._execute(req.execute)

    def _discard_folder(self, folder_id: str, exc: GDStorageError) -> None:
        logger.warning("Permission grant failed on %s; deleting folder", folder_id)
        req = self._service.files().delete(fileId=folder_id)
        try:
            self._execute(req.execute)
        except GDStorageError as cleanup_exc:
            logger.error("Unable to delete folder %s: %s", folder_id, cleanup_exc)
            exc.details["orphaned_folder_id"] = folder_id

    def _find_by_query(self, q: str) -> list[StoredFile]:
        all_files: list[StoredFile] = []
        page_token: Optional[str] = None

        logger.debug("Listing files: %s", q)
        while True:
            req = self._service.files().list(q=q, fields=LIST_FIELDS, pageToken=page_token)
            data = self._execute(req.execute)
            for f in data.get("files", []):
                all_files.append(stored_file_from_response(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> GDStorageError:
        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)

        if isinstance(exc, GDStorageError):
            return exc

        return RemoteError(f"Drive API error: {exc}", cause=exc)


def _upload_target(request: UploadRequest) -> tuple[str, str]:
    ext = file_extension(request.filename)
    mime_type = mime_for_extension(ext)
    return upload_name(request.name, ext), mime_type


def _escape_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except ValueError:
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[-1], dict):
                # The last entry carries the terminal reason code.
                details["domain"] = errors[-1].get("domain")
                if isinstance(errors[-1].get("reason"), str):
                    reason = errors[-1]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
