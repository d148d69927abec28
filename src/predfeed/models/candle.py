"""Candle, Interval, CandleSeries - OHLCV views."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Interval(str, Enum):
    """Supported candle widths."""

    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"
    ONE_HOUR = "1h"

    @property
    def seconds(self) -> int:
        return _INTERVAL_SECONDS[self]


_INTERVAL_SECONDS = {
    Interval.ONE_MINUTE: 60,
    Interval.FIVE_MINUTES: 300,
    Interval.ONE_HOUR: 3600,
}


class Candle(BaseModel):
    """One OHLCV bucket. period_start is seconds epoch."""

    period_start: int
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: float = Field(0.0, ge=0)


class CandleSeries(BaseModel):
    """Candles in ascending period_start order plus the path that produced them."""

    candles: list[Candle] = Field(default_factory=list)
    source: Literal["upstream", "trades", "empty"] = "empty"
