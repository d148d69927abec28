"""Market subcommand: price, candles, book."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

import typer

from predfeed.config.settings import Settings
from predfeed.dome.errors import DomeError, RateLimited
from predfeed.models.candle import Interval
from predfeed.service import MarketDataService

app = typer.Typer(help="Query price, candles and order book for a market slug")

_API_KEY_OPTION = typer.Option(..., "--api-key", "-k", envvar="DOME_API_KEY", help="Dome API key")


def _make_service(settings: Settings) -> MarketDataService:
    return MarketDataService.from_settings(settings)


def _run(ctx: typer.Context, op: Callable[[MarketDataService], Awaitable[Any]]) -> Any:
    """Run one service call to completion; map Dome failures to exit codes."""
    settings = ctx.obj["settings"]

    async def go() -> Any:
        async with _make_service(settings) as service:
            return await op(service)

    try:
        return asyncio.run(go())
    except RateLimited as e:
        typer.echo(f"Rate limited: {e}", err=True)
        raise typer.Exit(2)
    except DomeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _fmt_ts(seconds: float) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@app.command("price")
def price(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Market slug"),
    api_key: str = _API_KEY_OPTION,
) -> None:
    """Show the latest trade price."""
    value = _run(ctx, lambda s: s.latest_price(api_key, slug))
    if value is None:
        typer.echo(f"{slug}: no trades")
    else:
        typer.echo(f"{slug}: {value:.4f}")


@app.command("candles")
def candles(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Market slug"),
    interval: Interval = typer.Option(Interval.ONE_MINUTE, "--interval", "-i", help="Candle width"),
    api_key: str = _API_KEY_OPTION,
) -> None:
    """Show OHLCV candles (upstream candlesticks, or bucketed trades)."""
    series = _run(ctx, lambda s: s.candle_series(api_key, slug, interval))
    for c in series.candles:
        typer.echo(
            f"  {_fmt_ts(c.period_start)}  O {c.open:.4f}  H {c.high:.4f}  "
            f"L {c.low:.4f}  C {c.close:.4f}  V {c.volume:.2f}"
        )
    typer.echo(f"Total: {len(series.candles)} candles (source: {series.source})")


@app.command("book")
def book(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Market slug"),
    levels: int = typer.Option(10, "--levels", "-n", help="Price levels to show per side"),
    api_key: str = _API_KEY_OPTION,
) -> None:
    """Show the order book ladder with cumulative depth."""
    view = _run(ctx, lambda s: s.order_book(api_key, slug))
    if view.is_empty:
        typer.echo(f"{slug}: no order book (source: {view.source})")
        return
    typer.echo("  ASKS")
    for lev in reversed(view.asks[:levels]):
        typer.echo(f"    {lev.price:.3f}  {lev.size:>12.2f}  {lev.cumulative_size:>12.2f}")
    if view.spread is not None:
        typer.echo(f"  -- spread {view.spread:.3f}  mid {view.mid_price:.3f} --")
    typer.echo("  BIDS")
    for lev in view.bids[:levels]:
        typer.echo(f"    {lev.price:.3f}  {lev.size:>12.2f}  {lev.cumulative_size:>12.2f}")
    typer.echo(
        f"tick {view.tick_size}  min size {view.min_order_size}  neg risk {view.is_neg_risk}  "
        f"source: {view.source}"
    )
