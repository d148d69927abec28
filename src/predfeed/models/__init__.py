"""Canonical schema (Pydantic) - Trade, Candle, OrderBookView."""

from predfeed.models.candle import Candle, CandleSeries, Interval
from predfeed.models.orderbook import BookSnapshot, OrderBookView, OrderLevel, PriceLevel
from predfeed.models.trade import Trade

__all__ = [
    "Trade",
    "Candle",
    "CandleSeries",
    "Interval",
    "OrderLevel",
    "OrderBookView",
    "PriceLevel",
    "BookSnapshot",
]
