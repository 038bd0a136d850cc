"""Runtime configuration for gdstorage."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from gdstorage.errors import ConfigError

if TYPE_CHECKING:  # pragma: no cover
    from gdstorage.auth.credential import ServiceAccountCredential

ENV_SERVICE_ACCOUNT_JSON = "GOOGLE_ACCOUNT_SERVICE_JSON"
ENV_PROJECT_ID = "GOOGLE_PROJECT_ID"
ENV_APP_NAME = "APP_NAME"
ENV_ORGANIZER_EMAIL = "DRIVE_ORGANIZER_EMAIL"

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)
DEFAULT_CACHE_FILE_NAME = "svracc.json"
DEFAULT_APP_FOLDER_MARKER = "storage_"


@dataclass(slots=True, frozen=True)
class StorageConfig:
    """
    Configuration built once at startup and shared by the bootstrapper and
    the storage client.

    Values are validated for type here; presence of the credential, app name
    and organizer email is checked by the operations that need them.
    """

    service_account_json: str = ""
    app_name: str = ""
    organizer_email: Optional[str] = None
    project_id: Optional[str] = None
    working_dir: Optional[str] = None
    cache_file_name: str = DEFAULT_CACHE_FILE_NAME
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    app_folder_marker: str = DEFAULT_APP_FOLDER_MARKER

    def __post_init__(self) -> None:
        if not isinstance(self.service_account_json, str):
            raise ConfigError("service_account_json must be a string")
        if not isinstance(self.app_name, str):
            raise ConfigError("app_name must be a string")

        name = self.cache_file_name
        if not isinstance(name, str) or not name.strip() or os.path.basename(name) != name:
            raise ConfigError(
                "cache_file_name must be a bare file name",
                details={"cache_file_name": name},
            )

        scopes = self.scopes
        if (
            isinstance(scopes, str)
            or not scopes
            or not all(isinstance(s, str) and s.strip() for s in scopes)
        ):
            raise ConfigError("scopes must be a non-empty sequence of strings")
        object.__setattr__(self, "scopes", tuple(scopes))

        if not isinstance(self.app_folder_marker, str) or not self.app_folder_marker:
            raise ConfigError("app_folder_marker must be a non-empty string")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "StorageConfig":
        """Read configuration from environment variables (blank means unset)."""
        env = os.environ if environ is None else environ

        def _get(key: str) -> Optional[str]:
            value = env.get(key, "")
            return value if value.strip() else None

        values = {
            "service_account_json": _get(ENV_SERVICE_ACCOUNT_JSON) or "",
            "app_name": (_get(ENV_APP_NAME) or "").strip(),
            "organizer_email": (_get(ENV_ORGANIZER_EMAIL) or "").strip() or None,
            "project_id": (_get(ENV_PROJECT_ID) or "").strip() or None,
        }
        values.update(overrides)
        return cls(**values)

    def resolve_project_id(self, credential: Optional["ServiceAccountCredential"]) -> str:
        """Explicit project id first, then the one in the credential."""
        if self.project_id:
            return self.project_id
        if credential is not None:
            return credential.project_id
        return ""
