"""Structured events emitted while signing export requests."""
from __future__ import annotations

import logging
from typing import Dict

logger = logging.getLogger(__name__)


class TelemetrySink:
    """Receives request events such as ``request.signed``; payloads never carry the secret."""

    def emit(self, event: str, payload: Dict[str, object]) -> None:
        raise NotImplementedError


class NoOpTelemetry(TelemetrySink):
    """Default sink for clients built without telemetry."""

    def emit(self, event: str, payload: Dict[str, object]) -> None:
        return None


class LoggingTelemetry(TelemetrySink):
    """Writes each event to the module logger at DEBUG."""

    def emit(self, event: str, payload: Dict[str, object]) -> None:
        logger.debug("%s %s", event, payload)


__all__ = ["TelemetrySink", "NoOpTelemetry", "LoggingTelemetry"]
