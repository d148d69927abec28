"""predfeed - cached Dome market data: latest price, OHLCV candles, depth order book."""

__version__ = "0.1.0"
