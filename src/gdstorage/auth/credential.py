"""Service-account credential descriptor."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields

from gdstorage.errors import ConfigError


@dataclass(slots=True, frozen=True)
class ServiceAccountCredential:
    """
    Google service-account key, as downloaded from the Cloud console.

    Missing keys are kept as empty strings; the auth library decides whether
    the key is usable.
    """

    type: str = ""
    project_id: str = ""
    private_key_id: str = ""
    private_key: str = ""
    client_email: str = ""
    client_id: str = ""
    auth_uri: str = ""
    token_uri: str = ""
    auth_provider_x509_cert_url: str = ""
    client_x509_cert_url: str = ""

    @classmethod
    def from_json(cls, raw: str) -> "ServiceAccountCredential":
        """
        Parse raw JSON key content.

        Raises:
            ConfigError: on malformed JSON or a non-object document.
        """
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"Error parsing account service JSON content: {exc}",
                cause=exc,
            ) from exc

        if not isinstance(payload, dict):
            raise ConfigError("Account service JSON content must be an object")

        values = {}
        for f in fields(cls):
            value = payload.get(f.name)
            values[f.name] = "" if value is None else str(value)
        return cls(**values)
