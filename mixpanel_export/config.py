"""Protocol configuration shared by every request builder."""
from __future__ import annotations

from dataclasses import dataclass, replace

ENDPOINT = "http://mixpanel.com/api"
RAW_ENDPOINT = "http://data.mixpanel.com/api"
API_VERSION = "2.0"
RESPONSE_FORMAT = "json"
DEFAULT_EXPIRY_SECONDS = 600


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Immutable endpoint constants, constructed once and passed by reference."""

    endpoint: str = ENDPOINT
    raw_endpoint: str = RAW_ENDPOINT
    api_version: str = API_VERSION
    response_format: str = RESPONSE_FORMAT
    default_expiry_seconds: int = DEFAULT_EXPIRY_SECONDS
    # Off by default: the remote service expects the unescaped wire format.
    escape_query_values: bool = False
    # Off by default: caller copies of api_key, format and expire stay in the query.
    drop_reserved_parameters: bool = False

    def host_for(self, raw: bool) -> str:
        return self.raw_endpoint if raw else self.endpoint

    def with_escaping(self, enabled: bool = True) -> "ExportConfig":
        return replace(self, escape_query_values=enabled)

    def with_reserved_dropped(self, enabled: bool = True) -> "ExportConfig":
        return replace(self, drop_reserved_parameters=enabled)


DEFAULT_CONFIG = ExportConfig()


__all__ = [
    "ENDPOINT",
    "RAW_ENDPOINT",
    "API_VERSION",
    "RESPONSE_FORMAT",
    "DEFAULT_EXPIRY_SECONDS",
    "ExportConfig",
    "DEFAULT_CONFIG",
]
