"""Dome API client - authenticated GETs through the TTL cache, typed failures."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

import httpx
import structlog

from predfeed.config.settings import DEFAULT_DOME_BASE
from predfeed.dome.cache import DEFAULT_TTL_SEC, TTLCache
from predfeed.dome.errors import RateLimited, TransportError, UpstreamError

log = structlog.get_logger(__name__)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def canonical_query(params: Mapping[str, Any] | None) -> str:
    """'?k=v&...' in caller order with None values dropped; '' when nothing remains."""
    if not params:
        return ""
    pairs = [f"{_encode(k)}={_encode(v)}" for k, v in params.items() if v is not None]
    return "?" + "&".join(pairs) if pairs else ""


def _retry_after(resp: httpx.Response) -> float | None:
    raw = resp.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


class DomeClient:
    """
    Async Dome REST client. Every distinct path+query is fetched at most once per TTL;
    cache hits are free, misses count against upstream quota (see upstream_calls).
    The API key is supplied per request and never stored.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_DOME_BASE,
        *,
        cache: TTLCache | None = None,
        cache_ttl_sec: float = DEFAULT_TTL_SEC,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else TTLCache(ttl_sec=cache_ttl_sec)
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.upstream_calls = 0

    async def request(
        self,
        path: str,
        api_key: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """GET {base}{path}{query} as JSON. Raises RateLimited, UpstreamError or TransportError."""
        key = f"{path}{canonical_query(params)}"

        async def fetch() -> Any:
            return await self._fetch(path, key, api_key)

        return await self.cache.get_or_fetch(key, fetch)

    async def _fetch(self, path: str, key: str, api_key: str) -> Any:
        self.upstream_calls += 1
        url = f"{self.base_url}{key}"
        try:
            resp = await self._http.get(url, headers={"Authorization": f"Bearer {api_key}"})
        except httpx.TransportError as e:
            log.warning("dome_transport_error", path=path, error=str(e))
            raise TransportError(path, str(e) or type(e).__name__) from e
        if resp.status_code == 429:
            log.warning("dome_rate_limited", path=path)
            raise RateLimited(path, retry_after=_retry_after(resp))
        if not resp.is_success:
            log.warning("dome_http_error", path=path, status=resp.status_code)
            raise UpstreamError(path, resp.status_code, resp.reason_phrase)
        try:
            return resp.json()
        except ValueError as e:
            log.warning("dome_bad_json", path=path, status=resp.status_code)
            raise UpstreamError(path, resp.status_code, "invalid JSON body") from e

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> DomeClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
