from predfeed.orderbook.reconstruct import order_book, view_from_snapshot, view_from_trades

__all__ = ["order_book", "view_from_snapshot", "view_from_trades"]
