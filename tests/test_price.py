"""Latest price resolution."""

import pytest

from conftest import order
from predfeed.dome.errors import RateLimited
from predfeed.pricing.resolver import latest_price


@pytest.mark.asyncio
async def test_latest_price_is_first_trade(dome):
    dome.json("/polymarket/orders", {"orders": [order(0.62, 300), order(0.58, 200)]})
    client = dome.client()
    assert await latest_price(client, "k", "will-it-rain") == 0.62
    req = dome.requests[0]
    assert req.url.params["market_slug"] == "will-it-rain"
    assert req.url.params["limit"] == "1"
    await client.aclose()


@pytest.mark.asyncio
async def test_latest_price_none_without_trades(dome):
    dome.json("/polymarket/orders", {"orders": []})
    client = dome.client()
    assert await latest_price(client, "k", "brand-new-market") is None
    await client.aclose()


@pytest.mark.asyncio
async def test_latest_price_propagates_rate_limit(dome):
    dome.status("/polymarket/orders", 429)
    client = dome.client()
    with pytest.raises(RateLimited):
        await latest_price(client, "k", "will-it-rain")
    await client.aclose()


@pytest.mark.asyncio
async def test_latest_price_survives_non_finite_timestamp(dome):
    dome.raw("/polymarket/orders", '{"orders": [{"price": 0.61, "timestamp": Infinity, "token_id": "tok-yes"}]}')
    client = dome.client()
    assert await latest_price(client, "k", "will-it-rain") == 0.61
    await client.aclose()
