"""CLI commands against a stubbed Dome upstream."""

import pytest
from typer.testing import CliRunner

import predfeed.cli.app as app_module
import predfeed.cli.market as market_module
from conftest import order, orders_by_limit
from predfeed.cli.app import app
from predfeed.service import MarketDataService

runner = CliRunner()


@pytest.fixture
def cli_dome(dome, monkeypatch):
    # structlog caches loggers bound to the runner's stdout; keep test logging unconfigured
    monkeypatch.setattr(app_module, "configure_logging", lambda settings: None)
    monkeypatch.setattr(market_module, "_make_service", lambda settings: MarketDataService(dome.client()))
    return dome


def test_price_command(cli_dome):
    cli_dome.json("/polymarket/orders", {"orders": [order(0.615, 10)]})
    result = runner.invoke(app, ["market", "price", "will-it-rain", "-k", "key"])
    assert result.exit_code == 0
    assert "will-it-rain: 0.6150" in result.output
    assert cli_dome.requests[0].headers["Authorization"] == "Bearer key"


def test_price_command_reads_key_from_env(cli_dome):
    cli_dome.json("/polymarket/orders", {"orders": []})
    result = runner.invoke(app, ["market", "price", "new-market"], env={"DOME_API_KEY": "env-key"})
    assert result.exit_code == 0
    assert "no trades" in result.output
    assert cli_dome.requests[0].headers["Authorization"] == "Bearer env-key"


def test_rate_limited_exits_with_code_2(cli_dome):
    cli_dome.status("/polymarket/orders", 429)
    result = runner.invoke(app, ["market", "price", "will-it-rain", "-k", "key"])
    assert result.exit_code == 2
    assert "Rate limited" in result.output


def test_upstream_error_exits_with_code_1(cli_dome):
    cli_dome.status("/polymarket/orders", 401)
    result = runner.invoke(app, ["market", "candles", "will-it-rain", "-k", "key"])
    assert result.exit_code == 1
    assert "401" in result.output


def test_candles_command_reports_source(cli_dome):
    trades = [order(0.5, 10), order(0.6, 70)]
    cli_dome.handle("/polymarket/orders", orders_by_limit({1: trades[:1], 200: trades}))
    cli_dome.status("/polymarket/candlesticks/0xcond", 404)
    result = runner.invoke(app, ["market", "candles", "will-it-rain", "-i", "1m", "-k", "key"])
    assert result.exit_code == 0
    assert "Total: 2 candles (source: trades)" in result.output


def test_book_command_prints_ladder(cli_dome):
    trades = [order(0.55, 10, side="BUY", size=4), order(0.57, 9, side="SELL", size=3)]
    cli_dome.handle("/polymarket/orders", orders_by_limit({1: trades[:1], 50: trades}))
    cli_dome.status("/polymarket/orderbooks", 500)
    result = runner.invoke(app, ["market", "book", "will-it-rain", "-k", "key"])
    assert result.exit_code == 0
    assert "0.550" in result.output
    assert "0.570" in result.output
    assert "source: trades" in result.output


def test_book_command_empty(cli_dome):
    cli_dome.json("/polymarket/orders", {"orders": []})
    result = runner.invoke(app, ["market", "book", "new-market", "-k", "key"])
    assert result.exit_code == 0
    assert "no order book" in result.output


def test_help_describes_options_and_market_group():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Dome API" in result.output
    assert "--profile" in result.output
    assert "market" in result.output
