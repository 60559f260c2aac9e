"""Default HTTP collaborator for fetching signed export URLs."""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests

from .models import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """Plain GET over a requests session; no retries, body left undecoded."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        # A caller-supplied session is left for the caller to close.
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            # The query string carries the signature; log the path only.
            logger.warning("Export request to %s failed: %s", _redact(url), exc.__class__.__name__)
            raise TransportError(f"GET {_redact(url)} failed") from exc
        return response


def _redact(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


__all__ = ["HttpTransport"]
