from predfeed.candles.builder import build_candles, bucket_trades, candles

__all__ = ["build_candles", "bucket_trades", "candles"]
