"""Price-level aggregation and cumulative depth for bid/ask ladders."""

from __future__ import annotations

from typing import Iterable

from predfeed.models.orderbook import OrderLevel, PriceLevel
from predfeed.models.trade import Trade


def with_depth(levels: Iterable[PriceLevel]) -> list[OrderLevel]:
    """Attach running cumulative size in the given (already sorted) order."""
    out = []
    total = 0.0
    for lev in levels:
        total += lev.size
        out.append(OrderLevel(price=lev.price, size=lev.size, cumulative_size=total))
    return out


def sort_bids(levels: Iterable[PriceLevel]) -> list[PriceLevel]:
    """Price descending; equal prices keep input order."""
    return sorted(levels, key=lambda lev: lev.price, reverse=True)


def sort_asks(levels: Iterable[PriceLevel]) -> list[PriceLevel]:
    return sorted(levels, key=lambda lev: lev.price)


class TradeBookEngine:
    """Approximate L2 book from trade prints: BUY -> bids, SELL -> asks, sizes summed per price."""

    __slots__ = ("bids", "asks")

    def __init__(self) -> None:
        # price -> total size (bids: higher is better, asks: lower is better)
        self.bids: dict[float, float] = {}
        self.asks: dict[float, float] = {}

    def apply_trade(self, trade: Trade) -> None:
        if trade.side == "BUY":
            side = self.bids
        elif trade.side == "SELL":
            side = self.asks
        else:
            return
        price = round(trade.price, 6)
        side[price] = side.get(price, 0.0) + trade.size

    def apply_trades(self, trades: Iterable[Trade]) -> None:
        for trade in trades:
            self.apply_trade(trade)

    @property
    def best_bid(self) -> float | None:
        return max(self.bids) if self.bids else None

    @property
    def best_ask(self) -> float | None:
        return min(self.asks) if self.asks else None

    def depth_at_levels(self, n: int) -> tuple[list[PriceLevel], list[PriceLevel]]:
        """Return (top N bids, top N asks), best price first."""
        bid_list = [PriceLevel(price=p, size=s) for p, s in sorted(self.bids.items(), reverse=True)[:n]]
        ask_list = [PriceLevel(price=p, size=s) for p, s in sorted(self.asks.items())[:n]]
        return (bid_list, ask_list)
