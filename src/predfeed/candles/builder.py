"""OHLCV candles - upstream candlestick endpoint first, trade bucketing as fallback."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote

import structlog

from predfeed.dome.client import DomeClient
from predfeed.dome.errors import DomeError
from predfeed.dome.normalize import parse_candlesticks
from predfeed.models.candle import Candle, CandleSeries, Interval
from predfeed.models.trade import Trade
from predfeed.pricing.resolver import fetch_trades, latest_trade

log = structlog.get_logger(__name__)

CANDLESTICKS_PATH = "/polymarket/candlesticks/{condition_id}"
FALLBACK_TRADE_LIMIT = 200


def bucket_start(timestamp: int, interval_seconds: int) -> int:
    return (timestamp // interval_seconds) * interval_seconds


def bucket_trades(trades: Iterable[Trade], interval: Interval) -> list[Candle]:
    """
    Group trades into fixed-width buckets and emit one candle per non-empty bucket,
    ascending. Trades are stable-sorted by timestamp first, so open/close ties on an
    identical timestamp follow input order. Empty buckets are not filled.
    """
    width = interval.seconds
    buckets: dict[int, list[Trade]] = {}
    for trade in sorted(trades, key=lambda t: t.timestamp):
        buckets.setdefault(bucket_start(trade.timestamp, width), []).append(trade)
    candles = []
    for start in sorted(buckets):
        group = buckets[start]
        prices = [t.price for t in group]
        candles.append(
            Candle(
                period_start=start,
                open=prices[0],
                high=max(prices),
                low=min(prices),
                close=prices[-1],
                volume=sum(t.size for t in group),
            )
        )
    return candles


async def _upstream_candles(client: DomeClient, api_key: str, condition_id: str) -> list[Candle]:
    payload = await client.request(CANDLESTICKS_PATH.format(condition_id=quote(condition_id, safe="")), api_key)
    return sorted(parse_candlesticks(payload), key=lambda c: c.period_start)


async def build_candles(
    client: DomeClient,
    api_key: str,
    market_slug: str,
    interval: Interval | str = Interval.ONE_MINUTE,
) -> CandleSeries:
    """
    Candle series for a market plus the path taken.

    Errors from the condition lookup and from the fallback trade fetch propagate;
    any failure of the candlestick endpoint (or an empty answer) falls back to
    bucketing the last FALLBACK_TRADE_LIMIT trades.
    """
    interval = Interval(interval)
    latest = await latest_trade(client, api_key, market_slug)
    if latest is None:
        return CandleSeries(source="empty")

    if latest.condition_id:
        try:
            upstream = await _upstream_candles(client, api_key, latest.condition_id)
        except DomeError as e:
            log.warning(
                "candles_fallback",
                market_slug=market_slug,
                reason=type(e).__name__,
                error=str(e),
            )
        else:
            if upstream:
                return CandleSeries(candles=upstream, source="upstream")
            log.warning("candles_fallback", market_slug=market_slug, reason="no_upstream_candles")
    else:
        log.warning("candles_fallback", market_slug=market_slug, reason="no_condition_id")

    trades = await fetch_trades(client, api_key, market_slug, limit=FALLBACK_TRADE_LIMIT)
    if not trades:
        return CandleSeries(source="empty")
    return CandleSeries(candles=bucket_trades(trades, interval), source="trades")


async def candles(
    client: DomeClient,
    api_key: str,
    market_slug: str,
    interval: Interval | str = Interval.ONE_MINUTE,
) -> list[Candle]:
    series = await build_candles(client, api_key, market_slug, interval)
    return series.candles
