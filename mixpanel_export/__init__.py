"""Signed URL builder for analytics export endpoints."""
from .client import ExportClient
from .config import DEFAULT_CONFIG, ExportConfig
from .models import (
    CredentialUnavailable,
    Credentials,
    CredentialsNotConfigured,
    ExportError,
    ExportRequest,
    SignedRequest,
    TransportError,
)
from .request import RequestBuilder
from .security import CredentialStore, load_credentials
from .signing import generate_signature

__all__ = [
    "ExportClient",
    "ExportConfig",
    "DEFAULT_CONFIG",
    "Credentials",
    "CredentialStore",
    "CredentialUnavailable",
    "CredentialsNotConfigured",
    "ExportError",
    "ExportRequest",
    "SignedRequest",
    "TransportError",
    "RequestBuilder",
    "generate_signature",
    "load_credentials",
]
