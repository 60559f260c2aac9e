"""Core data models for signed export requests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import DEFAULT_EXPIRY_SECONDS


class ExportError(Exception):
    """Base exception for export request failures."""


class CredentialUnavailable(ExportError):
    """Raised when the API key or secret cannot be loaded."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class CredentialsNotConfigured(CredentialUnavailable):
    """Raised when a request is built before auth has been configured."""


class TransportError(ExportError):
    """Raised when the HTTP transport fails to fetch a signed URL."""


@dataclass(frozen=True, slots=True)
class Credentials:
    api_key: str
    api_secret: str = field(repr=False)


@dataclass(slots=True)
class ExportRequest:
    """A single endpoint call, built fresh and discarded after signing."""

    endpoint: str
    sub_method: str = ""
    parameters: Dict[str, str] = field(default_factory=dict)
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS
    raw: bool = False

    @property
    def path_segments(self) -> list[str]:
        segments = [self.endpoint]
        if self.sub_method:
            segments.append(self.sub_method)
        return segments


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Result of signing an ExportRequest."""

    request: ExportRequest
    expire: str
    signature: str
    url: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "endpoint": self.request.endpoint,
            "sub_method": self.request.sub_method,
            "raw": self.request.raw,
            "expire": self.expire,
            "signature": self.signature,
            "url": self.url,
        }


__all__ = [
    "ExportError",
    "CredentialUnavailable",
    "CredentialsNotConfigured",
    "TransportError",
    "Credentials",
    "ExportRequest",
    "SignedRequest",
]
