"""OrderLevel, OrderBookView - depth-annotated book ladder."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_TICK_SIZE = "0.001"
DEFAULT_MIN_ORDER_SIZE = "5"


class PriceLevel(BaseModel):
    """Single price level (price -> size) as reported upstream."""

    price: float = Field(..., ge=0, le=1)
    size: float = Field(..., ge=0)


class BookSnapshot(BaseModel):
    """One /polymarket/orderbooks snapshot. Levels in upstream order (not trusted)."""

    bids: list[PriceLevel] = Field(default_factory=list)
    asks: list[PriceLevel] = Field(default_factory=list)
    timestamp: int | None = None  # ms epoch
    asset_id: str | None = None
    market: str | None = None
    tick_size: str | None = None
    min_order_size: str | None = None
    neg_risk: bool | None = None
    hash: str | None = None


class OrderLevel(BaseModel):
    """Single price level with running depth."""

    price: float = Field(..., ge=0, le=1)
    size: float = Field(..., ge=0)
    cumulative_size: float = Field(..., ge=0)


class OrderBookView(BaseModel):
    """Bids price-descending, asks price-ascending, each with cumulative depth."""

    bids: list[OrderLevel] = Field(default_factory=list)
    asks: list[OrderLevel] = Field(default_factory=list)
    as_of: int | None = None  # ms epoch
    token_id: str | None = None
    market: str | None = None
    tick_size: str | None = DEFAULT_TICK_SIZE
    min_order_size: str | None = DEFAULT_MIN_ORDER_SIZE
    is_neg_risk: bool = False
    integrity_hash: str | None = None
    source: Literal["snapshot", "trades", "empty"] = "empty"

    @classmethod
    def empty(cls) -> OrderBookView:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.bids and not self.asks

    @property
    def best_bid(self) -> float | None:
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> float | None:
        return self.asks[0].price if self.asks else None

    @property
    def mid_price(self) -> float | None:
        bb, ba = self.best_bid, self.best_ask
        if bb is not None and ba is not None:
            return (bb + ba) / 2.0
        return bb if bb is not None else ba

    @property
    def spread(self) -> float | None:
        bb, ba = self.best_bid, self.best_ask
        if bb is not None and ba is not None:
            return ba - bb
        return None

    @property
    def bid_depth(self) -> float:
        return self.bids[-1].cumulative_size if self.bids else 0.0

    @property
    def ask_depth(self) -> float:
        return self.asks[-1].cumulative_size if self.asks else 0.0

    @property
    def imbalance(self) -> float | None:
        """(bid_depth - ask_depth) / (bid_depth + ask_depth) over the shown ladder. [-1, 1]."""
        total = self.bid_depth + self.ask_depth
        if total == 0:
            return None
        return (self.bid_depth - self.ask_depth) / total
