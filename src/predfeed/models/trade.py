"""Trade - one upstream order/trade record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Trade(BaseModel):
    """Executed order as reported by /polymarket/orders."""

    model_config = ConfigDict(frozen=True)

    price: float = Field(..., ge=0, le=1)
    size: float = Field(0.0, ge=0, description="shares_normalized")
    side: str | None = Field(None, pattern="^(BUY|SELL)$")
    timestamp: int = 0  # seconds epoch
    token_id: str | None = None
    condition_id: str | None = None
    market_slug: str | None = None
    order_hash: str | None = None
