"""Typed upstream failures raised by DomeClient."""

from __future__ import annotations


class DomeError(Exception):
    """Base class for Dome API failures."""


class RateLimited(DomeError):
    """Upstream answered 429. Callers may wait and retry or show stale data."""

    status = 429

    def __init__(self, path: str, retry_after: float | None = None) -> None:
        self.path = path
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded on {path}. Please wait before making more requests.")


class UpstreamError(DomeError):
    """Any other non-2xx response (or an undecodable 2xx body)."""

    def __init__(self, path: str, status: int, status_text: str = "") -> None:
        self.path = path
        self.status = status
        self.status_text = status_text
        super().__init__(f"Dome {path} {status}: {status_text}")


class TransportError(DomeError):
    """Network-level failure (DNS, connect, timeout). Original httpx error is __cause__."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Dome {path} transport failure: {reason}")
