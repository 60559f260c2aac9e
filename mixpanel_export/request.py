"""Signed URL assembly for export endpoints."""
from __future__ import annotations

import logging
import time
from typing import Callable, List, Mapping
from urllib.parse import quote

from .config import DEFAULT_CONFIG, ExportConfig
from .models import Credentials, ExportRequest, SignedRequest
from .signing import RESERVED_PARAMETERS, generate_signature

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def calculate_expiry(expiry_seconds: int, *, clock: Clock = time.time) -> str:
    """Unix epoch seconds (UTC) at which a signature stops being accepted."""

    return str(int(clock()) + int(expiry_seconds))


def build_path(config: ExportConfig, endpoint: str, sub_method: str = "", *, raw: bool = False) -> str:
    parts = [config.host_for(raw), config.api_version, endpoint]
    if sub_method:
        parts.append(sub_method)
    return "/".join(parts)


def _join(key: str, value: str, escape: bool) -> str:
    if escape:
        return f"{quote(key, safe='')}={quote(value, safe='')}"
    return f"{key}={value}"


def build_query(
    parameters: Mapping[str, str],
    credentials: Credentials,
    expire: str,
    signature: str,
    config: ExportConfig = DEFAULT_CONFIG,
) -> str:
    """Caller parameters first, then api_key, expire, format and sig, joined by '&'.

    Every caller entry is serialized, reserved names included, unless
    ``config.drop_reserved_parameters`` is set.
    """

    escape = config.escape_query_values
    drop = config.drop_reserved_parameters
    tokens: List[str] = [
        _join(str(key), str(value), escape)
        for key, value in parameters.items()
        if not (drop and key in RESERVED_PARAMETERS)
    ]
    tokens.append(_join("api_key", credentials.api_key, escape))
    tokens.append(_join("expire", expire, escape))
    tokens.append(_join("format", config.response_format, escape))
    tokens.append(_join("sig", signature, escape))
    return "&".join(tokens)


def compile_url(
    request: ExportRequest,
    credentials: Credentials,
    expire: str,
    signature: str,
    config: ExportConfig = DEFAULT_CONFIG,
) -> str:
    path = build_path(config, request.endpoint, request.sub_method, raw=request.raw)
    # The remote endpoint expects "/?" rather than a bare "?".
    return f"{path}/?{build_query(request.parameters, credentials, expire, signature, config)}"


class RequestBuilder:
    """Signs ExportRequests with a shared, read-only Credentials value."""

    def __init__(
        self,
        credentials: Credentials,
        config: ExportConfig = DEFAULT_CONFIG,
        *,
        clock: Clock = time.time,
    ) -> None:
        self.credentials = credentials
        self.config = config
        self._clock = clock

    def sign(self, request: ExportRequest, expire: str) -> str:
        return generate_signature(
            self.credentials,
            expire,
            request.parameters,
            response_format=self.config.response_format,
        )

    def build(self, request: ExportRequest) -> SignedRequest:
        expire = calculate_expiry(request.expiry_seconds, clock=self._clock)
        signature = self.sign(request, expire)
        url = compile_url(request, self.credentials, expire, signature, self.config)
        logger.debug(
            "Signed %s request (expire=%s)",
            "/".join(request.path_segments),
            expire,
        )
        return SignedRequest(request=request, expire=expire, signature=signature, url=url)


__all__ = [
    "RequestBuilder",
    "build_path",
    "build_query",
    "calculate_expiry",
    "compile_url",
]
