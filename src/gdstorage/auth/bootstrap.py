"""Service-account bootstrap: credential cache file and Drive service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Sequence

from gdstorage.config import ENV_SERVICE_ACCOUNT_JSON, StorageConfig
from gdstorage.errors import ClientConnectionError, ConfigError, LocalIOError

from .credential import ServiceAccountCredential

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ClientHandle:
    """Authenticated Drive v3 service plus the credential it was built from."""

    service: Any
    credential: ServiceAccountCredential
    cache_path: str


def initialize(config: StorageConfig) -> ClientHandle:
    """
    Build a ClientHandle from the configured service-account JSON.

    Steps:
        1. Parse the credential.
        2. Keep `<working_dir>/<cache_file_name>` identical to the raw JSON.
        3. Build the Drive service from that file.

    Raises:
        ConfigError: credential missing or malformed.
        LocalIOError: working directory or cache file unusable.
        ClientConnectionError: Drive service could not be built.
    """
    raw = config.service_account_json
    if not raw or not raw.strip():
        raise ConfigError(
            "Missing account service json data",
            details={"env": ENV_SERVICE_ACCOUNT_JSON},
        )

    credential = ServiceAccountCredential.from_json(raw)

    working_dir = _resolve_working_dir(config)
    logger.info("Working dir: %s", working_dir)

    cache_path = os.path.join(working_dir, config.cache_file_name)
    sync_credential_cache(cache_path, raw)

    service = build_drive_service(cache_path, config.scopes)
    return ClientHandle(service=service, credential=credential, cache_path=cache_path)


def sync_credential_cache(cache_path: str, raw: str) -> bool:
    """
    Write `raw` to `cache_path` unless the file already holds the same bytes.

    Returns:
        True if the file was written.

    Raises:
        LocalIOError: on any stat/read/write failure.
    """
    expected = raw.encode("utf-8")

    try:
        exists = os.path.exists(cache_path)
        if exists and not os.path.isfile(cache_path):
            raise IsADirectoryError(cache_path)
    except OSError as exc:
        raise LocalIOError(
            f"Error loading service account file: {exc}",
            details={"cache_path": cache_path},
            cause=exc,
        ) from exc

    if exists:
        try:
            with open(cache_path, "rb") as f:
                current = f.read()
        except OSError as exc:
            raise LocalIOError(
                f"Error reading service account file: {exc}",
                details={"cache_path": cache_path},
                cause=exc,
            ) from exc

        if current == expected:
            logger.debug("Credential cache is up to date: %s", cache_path)
            return False

    _write_cache_file(cache_path, expected)
    logger.info(
        "%s credential cache: %s",
        "Overwrote" if exists else "Created",
        cache_path,
    )
    return True


def build_drive_service(cache_path: str, scopes: Sequence[str]):
    """
    Build a Drive API service resource from a service-account key file.

    Returns:
        googleapiclient.discovery.Resource
    """
    try:
        from google.oauth2 import service_account
        from googleapiclient.discovery import build
    except Exception as exc:  # pragma: no cover
        raise ClientConnectionError(
            "Google API libraries are not available",
            details={"hint": "Install google-auth and google-api-python-client"},
            cause=exc,
        ) from exc

    try:
        creds = service_account.Credentials.from_service_account_file(
            cache_path,
            scopes=list(scopes),
        )
        return build("drive", "v3", credentials=creds, cache_discovery=False)
    except Exception as exc:
        raise ClientConnectionError(
            f"Error creating drive service api: {exc}",
            details={"cache_path": cache_path},
            cause=exc,
        ) from exc


def _resolve_working_dir(config: StorageConfig) -> str:
    if config.working_dir:
        return config.working_dir
    try:
        return os.getcwd()
    except OSError as exc:
        raise LocalIOError(
            f"Error retrieving working directory: {exc}",
            cause=exc,
        ) from exc


def _write_cache_file(cache_path: str, content: bytes) -> None:
    try:
        with open(cache_path, "wb") as f:
            f.write(content)
    except OSError as exc:
        raise LocalIOError(
            f"Error writing service account file: {exc}",
            details={"cache_path": cache_path},
            cause=exc,
        ) from exc
