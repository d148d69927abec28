"""Dome API access: TTL cache, client, typed errors, payload normalization."""

from predfeed.dome.cache import TTLCache
from predfeed.dome.client import DomeClient, canonical_query
from predfeed.dome.errors import DomeError, RateLimited, TransportError, UpstreamError

__all__ = [
    "TTLCache",
    "DomeClient",
    "canonical_query",
    "DomeError",
    "RateLimited",
    "UpstreamError",
    "TransportError",
]
