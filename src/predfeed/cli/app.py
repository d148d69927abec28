"""`predfeed` command line: global config options, then the market commands."""

from pathlib import Path

import typer

from predfeed.config import get_settings
from predfeed.config.settings import configure_logging

app = typer.Typer(
    name="predfeed",
    help="Query Polymarket data through the Dome API with a short-lived response cache.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Directory holding default.toml and profile files"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Profile file merged over default.toml, e.g. dev"
    ),
) -> None:
    """Load settings for the chosen profile before any market command runs."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {"settings": settings, "config_dir": config_dir, "profile": profile}


from predfeed.cli import market  # noqa: E402

app.add_typer(market.app, name="market")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
