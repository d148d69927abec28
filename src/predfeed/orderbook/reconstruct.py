"""Order book view - upstream snapshot first, trade aggregation as fallback. Never raises."""

from __future__ import annotations

import time

import structlog

from predfeed.dome.client import DomeClient
from predfeed.dome.errors import DomeError
from predfeed.dome.normalize import parse_book_snapshots
from predfeed.models.orderbook import (
    DEFAULT_MIN_ORDER_SIZE,
    DEFAULT_TICK_SIZE,
    BookSnapshot,
    OrderBookView,
)
from predfeed.models.trade import Trade
from predfeed.orderbook.engine import TradeBookEngine, sort_asks, sort_bids, with_depth
from predfeed.pricing.resolver import fetch_trades, latest_trade

log = structlog.get_logger(__name__)

ORDERBOOKS_PATH = "/polymarket/orderbooks"
SNAPSHOT_WINDOW_MS = 60 * 60 * 1000
FALLBACK_TRADE_LIMIT = 50
FALLBACK_MAX_LEVELS = 15


def _now_ms() -> int:
    return int(time.time() * 1000)


def view_from_snapshot(snapshot: BookSnapshot) -> OrderBookView:
    """Full snapshot ladder, re-sorted, with depth. Absent metadata keeps declared defaults."""
    return OrderBookView(
        bids=with_depth(sort_bids(snapshot.bids)),
        asks=with_depth(sort_asks(snapshot.asks)),
        as_of=snapshot.timestamp,
        token_id=snapshot.asset_id,
        market=snapshot.market,
        tick_size=snapshot.tick_size or DEFAULT_TICK_SIZE,
        min_order_size=snapshot.min_order_size or DEFAULT_MIN_ORDER_SIZE,
        is_neg_risk=bool(snapshot.neg_risk),
        integrity_hash=snapshot.hash,
        source="snapshot",
    )


def view_from_trades(
    trades: list[Trade],
    token_id: str | None,
    now_ms: int,
    max_levels: int = FALLBACK_MAX_LEVELS,
) -> OrderBookView:
    """Aggregate trades per price, keep the best max_levels per side, then accumulate depth."""
    engine = TradeBookEngine()
    engine.apply_trades(trades)
    bids, asks = engine.depth_at_levels(max_levels)
    return OrderBookView(
        bids=with_depth(bids),
        asks=with_depth(asks),
        as_of=now_ms,
        token_id=token_id,
        tick_size=DEFAULT_TICK_SIZE,
        min_order_size=DEFAULT_MIN_ORDER_SIZE,
        is_neg_risk=False,
        integrity_hash=None,
        source="trades",
    )


async def _snapshot(client: DomeClient, api_key: str, token_id: str, now_ms: int) -> BookSnapshot | None:
    payload = await client.request(
        ORDERBOOKS_PATH,
        api_key,
        {
            "token_id": token_id,
            "start_time": now_ms - SNAPSHOT_WINDOW_MS,
            "end_time": now_ms,
            "limit": 1,
        },
    )
    snapshots = parse_book_snapshots(payload)
    return snapshots[0] if snapshots else None


async def _build(client: DomeClient, api_key: str, market_slug: str, now_ms: int) -> OrderBookView:
    latest = await latest_trade(client, api_key, market_slug)
    if latest is None:
        return OrderBookView.empty()

    if not latest.token_id:
        log.warning("orderbook_fallback", market_slug=market_slug, reason="no_token_id")
    else:
        try:
            snapshot = await _snapshot(client, api_key, latest.token_id, now_ms)
        except DomeError as e:
            log.warning(
                "orderbook_fallback",
                market_slug=market_slug,
                reason=type(e).__name__,
                error=str(e),
            )
        else:
            if snapshot is not None:
                return view_from_snapshot(snapshot)
            log.warning("orderbook_fallback", market_slug=market_slug, reason="no_snapshots")

    trades = await fetch_trades(client, api_key, market_slug, limit=FALLBACK_TRADE_LIMIT)
    if not trades:
        return OrderBookView.empty()
    return view_from_trades(trades, latest.token_id, now_ms)


async def order_book(
    client: DomeClient,
    api_key: str,
    market_slug: str,
    now_ms: int | None = None,
) -> OrderBookView:
    """Order book for a market. Any failure yields the empty view instead of an exception."""
    try:
        return await _build(client, api_key, market_slug, now_ms if now_ms is not None else _now_ms())
    except Exception:
        log.error("orderbook_failed", market_slug=market_slug, exc_info=True)
        return OrderBookView.empty()
