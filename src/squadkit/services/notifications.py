"""Availability notification dispatch over HTTP."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from squadkit.errors import SquadkitError

logger = logging.getLogger("uvicorn.error")

_NOTIFY_URL_ENV = "SQUADKIT_NOTIFY_URL"
_NOTIFY_TIMEOUT_ENV = "SQUADKIT_NOTIFY_TIMEOUT"
_NOTIFY_TIMEOUT_DEFAULT = 10.0
NOTIFY_PATH = "/send-availability-notification"


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None and value < clamp_min:
        logger.warning("%s below %.2f (%s); using default %.2f", name, clamp_min, raw, default)
        return default
    return value


class NotificationError(SquadkitError):
    """Raised when a notifier cannot be used at all (for example no URL)."""


class Notifier(Protocol):
    def send(self, event_id: str) -> None: ...


class HttpNotifier:
    """Posts ``{"eventId": ...}`` to the notification endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or os.getenv(_NOTIFY_URL_ENV) or "").rstrip("/")
        self.timeout = (
            timeout
            if timeout is not None
            else _env_float(_NOTIFY_TIMEOUT_ENV, _NOTIFY_TIMEOUT_DEFAULT, clamp_min=0.1)
        )
        self._transport = transport

    def send(self, event_id: str) -> None:
        if not self.base_url:
            raise NotificationError(f"{_NOTIFY_URL_ENV} is not configured")
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(f"{self.base_url}{NOTIFY_PATH}", json={"eventId": event_id})
            response.raise_for_status()


@dataclass(frozen=True)
class NotificationResult:
    event_id: str
    sent: bool
    message: str


def notify_event(notifier: Notifier, event_id: str) -> NotificationResult:
    """Send once and report the outcome; failures are logged, never raised."""

    try:
        notifier.send(event_id)
    except (httpx.HTTPError, SquadkitError) as exc:
        logger.warning("Availability notification for event %s failed: %s", event_id, exc)
        return NotificationResult(
            event_id=event_id,
            sent=False,
            message="Failed to send availability notifications",
        )
    logger.info("Availability notification sent for event %s", event_id)
    return NotificationResult(
        event_id=event_id,
        sent=True,
        message="Availability notifications sent",
    )


__all__ = [
    "HttpNotifier",
    "NOTIFY_PATH",
    "NotificationError",
    "NotificationResult",
    "Notifier",
    "notify_event",
]
