"""MarketDataService - caller-facing latest price, candles and order book."""

from __future__ import annotations

from typing import Any

from predfeed.candles.builder import build_candles
from predfeed.config.settings import Settings
from predfeed.dome.client import DomeClient
from predfeed.models.candle import Candle, CandleSeries, Interval
from predfeed.models.orderbook import OrderBookView
from predfeed.orderbook.reconstruct import order_book
from predfeed.pricing.resolver import latest_price


class MarketDataService:
    """One Dome client (and so one cache) shared by all three views."""

    def __init__(self, client: DomeClient | None = None) -> None:
        self.client = client or DomeClient()

    @classmethod
    def from_settings(cls, settings: Settings, **client_kwargs: Any) -> MarketDataService:
        return cls(
            DomeClient(
                settings.dome_base_url,
                cache_ttl_sec=settings.cache_ttl_sec,
                timeout=settings.timeout_sec,
                **client_kwargs,
            )
        )

    async def latest_price(self, api_key: str, market_slug: str) -> float | None:
        return await latest_price(self.client, api_key, market_slug)

    async def candle_series(
        self, api_key: str, market_slug: str, interval: Interval | str = Interval.ONE_MINUTE
    ) -> CandleSeries:
        return await build_candles(self.client, api_key, market_slug, interval)

    async def candles(
        self, api_key: str, market_slug: str, interval: Interval | str = Interval.ONE_MINUTE
    ) -> list[Candle]:
        series = await self.candle_series(api_key, market_slug, interval)
        return series.candles

    async def order_book(self, api_key: str, market_slug: str) -> OrderBookView:
        return await order_book(self.client, api_key, market_slug)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> MarketDataService:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
