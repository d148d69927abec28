from predfeed.pricing.resolver import fetch_trades, latest_price, latest_trade

__all__ = ["fetch_trades", "latest_price", "latest_trade"]
