"""Latest price and trade lookups by market slug."""

from __future__ import annotations

from predfeed.dome.client import DomeClient
from predfeed.dome.normalize import parse_orders
from predfeed.models.trade import Trade

ORDERS_PATH = "/polymarket/orders"


async def fetch_trades(client: DomeClient, api_key: str, market_slug: str, limit: int) -> list[Trade]:
    """Most recent trades for the slug, newest first (upstream order)."""
    payload = await client.request(ORDERS_PATH, api_key, {"market_slug": market_slug, "limit": limit})
    return parse_orders(payload)


async def latest_trade(client: DomeClient, api_key: str, market_slug: str) -> Trade | None:
    trades = await fetch_trades(client, api_key, market_slug, limit=1)
    return trades[0] if trades else None


async def latest_price(client: DomeClient, api_key: str, market_slug: str) -> float | None:
    """Price of the most recent trade, or None when the market has no trades. Dome errors propagate."""
    trade = await latest_trade(client, api_key, market_slug)
    return trade.price if trade is not None else None
