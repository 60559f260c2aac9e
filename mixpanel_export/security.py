"""Credential loading: API key and secret read once from external sources."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Optional

from .models import CredentialUnavailable, Credentials

logger = logging.getLogger(__name__)

KEY_FILE_ENV = "MIXPANEL_API_KEY_FILE"
SECRET_FILE_ENV = "MIXPANEL_API_SECRET_FILE"

CredentialReader = Callable[[str], str]


def read_credential_file(path: str | Path) -> str:
    """Return the stripped contents of a credential file."""

    return Path(path).read_text(encoding="utf-8").strip()


def _resolve(source: str | Path, reader: CredentialReader, label: str) -> str:
    try:
        value = reader(str(source))
    except (OSError, ValueError) as exc:
        # ValueError covers UnicodeDecodeError from non-UTF-8 credential files.
        reason = getattr(exc, "strerror", None) or exc.__class__.__name__
        logger.error("Failed to read %s from %s: %s", label, source, reason)
        raise CredentialUnavailable(f"Unable to read {label} from {source}", source=str(source)) from exc
    value = (value or "").strip()
    if not value:
        logger.error("%s source %s is empty", label.capitalize(), source)
        raise CredentialUnavailable(f"{label.capitalize()} source {source} is empty", source=str(source))
    return value


def load_credentials(
    key_source: str | Path,
    secret_source: str | Path,
    *,
    reader: CredentialReader = read_credential_file,
) -> Credentials:
    """Load and strip the API key and secret from two opaque locators."""

    api_key = _resolve(key_source, reader, "API key")
    api_secret = _resolve(secret_source, reader, "API secret")
    logger.debug("Loaded credentials from %s and %s", key_source, secret_source)
    return Credentials(api_key=api_key, api_secret=api_secret)


class CredentialStore:
    """Builds Credentials from files named in the environment or from raw values."""

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        reader: CredentialReader = read_credential_file,
    ) -> Credentials:
        env = os.environ if environ is None else environ
        key_path = env.get(KEY_FILE_ENV)
        secret_path = env.get(SECRET_FILE_ENV)
        if not key_path:
            raise CredentialUnavailable(f"{KEY_FILE_ENV} is not set")
        if not secret_path:
            raise CredentialUnavailable(f"{SECRET_FILE_ENV} is not set")
        return load_credentials(key_path, secret_path, reader=reader)

    @classmethod
    def from_values(cls, api_key: str, api_secret: str) -> Credentials:
        key = (api_key or "").strip()
        secret = (api_secret or "").strip()
        if not key or not secret:
            raise CredentialUnavailable("API key and secret must both be non-empty")
        return Credentials(api_key=key, api_secret=secret)


__all__ = [
    "KEY_FILE_ENV",
    "SECRET_FILE_ENV",
    "CredentialStore",
    "load_credentials",
    "read_credential_file",
]
