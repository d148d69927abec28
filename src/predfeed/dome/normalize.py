"""Dome REST payloads -> canonical Trade / Candle / BookSnapshot. Missing fields never raise."""

from __future__ import annotations

import math
from typing import Any

import structlog
from pydantic import ValidationError

from predfeed.models.candle import Candle
from predfeed.models.orderbook import BookSnapshot, PriceLevel
from predfeed.models.trade import Trade

log = structlog.get_logger(__name__)


def _float(s: str | float | None) -> float | None:
    """Finite float or None; NaN and +/-inf count as missing."""
    if s is None or isinstance(s, bool):
        return None
    try:
        v = float(s)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def _int(s: str | int | float | None) -> int | None:
    v = _float(s)
    return int(v) if v is not None else None


def _str(s: Any) -> str | None:
    if s is None or s == "":
        return None
    return str(s)


def _records(payload: Any, field: str) -> list[dict[str, Any]]:
    """payload[field] as a list of dicts; anything else is treated as empty."""
    if not isinstance(payload, dict):
        return []
    rows = payload.get(field) or []
    if not isinstance(rows, list):
        return []
    return [r for r in rows if isinstance(r, dict)]


def parse_trade(raw: dict[str, Any]) -> Trade | None:
    """Convert one /polymarket/orders record. Returns None when price is unusable."""
    price = _float(raw.get("price"))
    if price is None or not 0 <= price <= 1:
        return None
    size = _float(raw.get("shares_normalized"))
    if size is None:
        size = _float(raw.get("size")) or 0.0
    side = (_str(raw.get("side")) or "").upper()
    try:
        return Trade(
            price=price,
            size=max(size, 0.0),
            side=side if side in ("BUY", "SELL") else None,
            timestamp=_int(raw.get("timestamp")) or 0,
            token_id=_str(raw.get("token_id")),
            condition_id=_str(raw.get("condition_id")),
            market_slug=_str(raw.get("market_slug")),
            order_hash=_str(raw.get("order_hash")),
        )
    except ValidationError as e:
        log.warning("skip_trade", order_hash=raw.get("order_hash"), error=str(e))
        return None


def parse_orders(payload: Any) -> list[Trade]:
    """Trades from an /polymarket/orders response, in upstream order."""
    out = []
    for raw in _records(payload, "orders"):
        trade = parse_trade(raw)
        if trade is not None:
            out.append(trade)
    return out


def _candle_records(payload: Any) -> list[dict[str, Any]]:
    """
    Flatten the candlesticks field. Upstream nests it per outcome token as
    [[candles, token_meta], ...]; the first token's candles are used. A flat list
    of candle dicts is accepted too.
    """
    if not isinstance(payload, dict):
        return []
    series = payload.get("candlesticks") or []
    if not isinstance(series, list) or not series:
        return []
    first = series[0]
    if isinstance(first, list):
        rows = first[0] if first and isinstance(first[0], list) else first
    else:
        rows = series
    return [r for r in rows if isinstance(r, dict)]


def _ohlc(price: dict[str, Any], name: str) -> float | None:
    v = _float(price.get(name))
    if v is None:
        v = _float(price.get(f"{name}_dollars"))
    return v


def parse_candle(raw: dict[str, Any]) -> Candle | None:
    """One upstream candle. end_period_ts is kept as the period boundary, unadjusted."""
    ts = _int(raw.get("end_period_ts"))
    price = raw.get("price")
    if ts is None or not isinstance(price, dict):
        return None
    o, h, lo, c = (_ohlc(price, n) for n in ("open", "high", "low", "close"))
    if o is None or h is None or lo is None or c is None:
        return None
    try:
        return Candle(
            period_start=ts,
            open=o,
            high=h,
            low=lo,
            close=c,
            volume=_float(raw.get("volume")) or 0.0,
        )
    except ValidationError as e:
        log.warning("skip_candle", end_period_ts=ts, error=str(e))
        return None


def parse_candlesticks(payload: Any) -> list[Candle]:
    out = []
    for raw in _candle_records(payload):
        candle = parse_candle(raw)
        if candle is not None:
            out.append(candle)
    return out


def _levels(raw_levels: Any) -> list[PriceLevel]:
    if not isinstance(raw_levels, list):
        return []
    out = []
    for lev in raw_levels:
        if not isinstance(lev, dict):
            continue
        p, s = _float(lev.get("price")), _float(lev.get("size"))
        if p is None or s is None:
            continue
        if 0 <= p <= 1 and s >= 0:
            out.append(PriceLevel(price=p, size=s))
    return out


def parse_book_snapshot(raw: dict[str, Any]) -> BookSnapshot:
    """Convert one /polymarket/orderbooks snapshot. Unknown or absent metadata maps to None."""
    neg_risk = raw.get("negRisk")
    return BookSnapshot(
        bids=_levels(raw.get("bids")),
        asks=_levels(raw.get("asks")),
        timestamp=_int(raw.get("timestamp")),
        asset_id=_str(raw.get("assetId") or raw.get("asset_id")),
        market=_str(raw.get("market")),
        tick_size=_str(raw.get("tickSize")),
        min_order_size=_str(raw.get("minOrderSize")),
        neg_risk=neg_risk if isinstance(neg_risk, bool) else None,
        hash=_str(raw.get("hash")),
    )


def parse_book_snapshots(payload: Any) -> list[BookSnapshot]:
    return [parse_book_snapshot(raw) for raw in _records(payload, "snapshots")]
