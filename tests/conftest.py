"""Shared fixtures: an in-process Dome upstream built on httpx.MockTransport."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from predfeed.dome.client import DomeClient

BASE_URL = "https://dome.test/v1"


class FakeDome:
    """Routes requests by path (relative to /v1). A route is JSON, a status, or a callable."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def json(self, path: str, payload: Any, status: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status, json=payload)

    def status(self, path: str, status: int, headers: dict[str, str] | None = None) -> None:
        self.routes[path] = lambda request: httpx.Response(status, headers=headers, text="")

    def raw(self, path: str, body: str) -> None:
        """Serve body verbatim as JSON; allows tokens like NaN that encoders refuse."""
        self.routes[path] = lambda request: httpx.Response(
            200, content=body.encode(), headers={"content-type": "application/json"}
        )

    def fail(self, path: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[path] = handler

    def handle(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.removeprefix("/v1") == path]

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        handler = self.routes.get(path)
        if handler is None:
            return httpx.Response(404, text="not found")
        return handler(request)

    def client(self, **kwargs: Any) -> DomeClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self._dispatch))
        return DomeClient(BASE_URL, http_client=http, **kwargs)


def order(
    price: float,
    timestamp: int,
    side: str = "BUY",
    size: float = 10.0,
    token_id: str = "tok-yes",
    condition_id: str = "0xcond",
) -> dict[str, Any]:
    """One /polymarket/orders record in upstream shape."""
    return {
        "token_id": token_id,
        "side": side,
        "market_slug": "will-it-rain",
        "condition_id": condition_id,
        "shares": int(size * 1_000_000),
        "shares_normalized": size,
        "price": price,
        "timestamp": timestamp,
        "order_hash": f"0x{timestamp:x}",
    }


def orders_by_limit(by_limit: dict[int, list[dict[str, Any]]]) -> Callable[[httpx.Request], httpx.Response]:
    """Answer /polymarket/orders according to the requested limit."""

    def handler(request: httpx.Request) -> httpx.Response:
        limit = int(request.url.params["limit"])
        return httpx.Response(200, json={"orders": by_limit.get(limit, [])})

    return handler


@pytest.fixture
def dome() -> FakeDome:
    return FakeDome()
