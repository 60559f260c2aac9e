"""Export client: auth configuration plus the endpoint presets."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Mapping, Optional

import requests

from .config import DEFAULT_CONFIG, ExportConfig
from .models import Credentials, CredentialsNotConfigured, ExportRequest, SignedRequest
from .request import Clock, RequestBuilder
from .security import CredentialReader, load_credentials, read_credential_file
from .telemetry import NoOpTelemetry, TelemetrySink
from .transport import HttpTransport

# operation name -> (endpoint, sub_method, raw host)
PRESETS: dict[str, tuple[str, str, bool]] = {
    "events": ("events", "", False),
    "events-top": ("events", "top", False),
    "events-names": ("events", "names", False),
    "raw-export": ("export", "", True),
}


class ExportClient:
    """Builds signed URLs for the events and raw export endpoints."""

    def __init__(
        self,
        config: ExportConfig = DEFAULT_CONFIG,
        *,
        credentials: Optional[Credentials] = None,
        clock: Clock = time.time,
        telemetry: Optional[TelemetrySink] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self.config = config
        self.credentials = credentials
        self._clock = clock
        self.telemetry = telemetry or NoOpTelemetry()
        self._transport = transport
        self._owns_transport = False

    # -------------------------------------------------------------------- auth
    def configure_auth(
        self,
        key_locator: str | Path,
        secret_locator: str | Path,
        *,
        reader: CredentialReader = read_credential_file,
    ) -> Credentials:
        self.credentials = load_credentials(key_locator, secret_locator, reader=reader)
        return self.credentials

    # ---------------------------------------------------------------- requests
    def create_request(
        self,
        endpoint: str,
        sub_method: str = "",
        parameters: Optional[Mapping[str, str]] = None,
        *,
        expiry_seconds: Optional[int] = None,
        raw: bool = False,
    ) -> SignedRequest:
        """Sign one request; the base of every endpoint preset."""

        if self.credentials is None:
            raise CredentialsNotConfigured("configure_auth must succeed before building requests")
        request = ExportRequest(
            endpoint=endpoint,
            sub_method=sub_method,
            parameters=dict(parameters or {}),
            expiry_seconds=(
                self.config.default_expiry_seconds if expiry_seconds is None else expiry_seconds
            ),
            raw=raw,
        )
        signed = RequestBuilder(self.credentials, self.config, clock=self._clock).build(request)
        self.telemetry.emit(
            "request.signed",
            {
                "endpoint": endpoint,
                "sub_method": sub_method,
                "raw": raw,
                "expire": signed.expire,
            },
        )
        return signed

    def create_preset(
        self,
        operation: str,
        parameters: Optional[Mapping[str, str]] = None,
        *,
        expiry_seconds: Optional[int] = None,
    ) -> SignedRequest:
        endpoint, sub_method, raw = PRESETS[operation]
        return self.create_request(
            endpoint,
            sub_method,
            parameters,
            expiry_seconds=expiry_seconds,
            raw=raw,
        )

    def events(self, parameters: Optional[Mapping[str, str]] = None) -> str:
        return self.create_preset("events", parameters).url

    def events_top(self, parameters: Optional[Mapping[str, str]] = None) -> str:
        return self.create_preset("events-top", parameters).url

    def events_names(self, parameters: Optional[Mapping[str, str]] = None) -> str:
        return self.create_preset("events-names", parameters).url

    def raw_export(self, parameters: Optional[Mapping[str, str]] = None) -> str:
        """Raw event dump from the bulk-export host.

        Expects ``from_date`` and ``to_date`` (``yyyy-mm-dd``); ``event``,
        ``where`` and ``bucket`` are optional. Nothing is validated locally.
        """

        return self.create_preset("raw-export", parameters).url

    # --------------------------------------------------------------- transport
    def fetch(self, url: str) -> requests.Response:
        if self._transport is None:
            self._transport = HttpTransport()
            self._owns_transport = True
        return self._transport.get(url)

    def close(self) -> None:
        """Close the transport created by ``fetch``; injected transports are left open."""

        if self._owns_transport and self._transport is not None:
            self._transport.close()
            self._transport = None
            self._owns_transport = False

    def __enter__(self) -> "ExportClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ExportClient", "PRESETS"]
