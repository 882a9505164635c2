"""CLI entrypoint for the fair LP price oracle."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Annotated

import typer

from .errors import FairPriceError
from .logger import setup_logging
from .report import dumps, format_error_panel, format_fair_rate_table
from .settings import CONFIG_ENV_VAR, OracleSettings
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Manipulation-resistant fair pricing for AMM LP tokens.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("fair_lp_oracle")


@app.command()
def price(
    lp_token: Annotated[
        str | None, typer.Argument(help="LP token address to price.")
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [fair_lp_oracle] table).",
        ),
    ] = None,
    rpc_url: Annotated[
        str | None,
        typer.Option("--rpc", help="JSON-RPC endpoint; overrides the configured one."),
    ] = None,
    block_number: Annotated[
        int | None,
        typer.Option(
            "--block-number",
            help="Block number to use for rpc calls. If not provided, the latest block will be used.",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON instead of a table."),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (with secrets redacted) and exit.",
        ),
    ] = False,
):
    """Compute the fair price of one LP token share.

    Loads configuration, reads the pool and its asset prices, and prints the
    fair rate. Exits with code 1 when the query fails.
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, int | str] = {}
    if rpc_url is not None:
        init_kwargs["rpc_url"] = rpc_url
    if block_number is not None:
        init_kwargs["block_number"] = block_number
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = OracleSettings(**init_kwargs)

    # keep stdout clean for machine-readable output
    setup_logging(settings.log_level, stream=sys.stderr if as_json else None)
    state = AppState(settings=settings, logger=_build_logger())

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if not lp_token:
        raise typer.BadParameter("lp_token must be provided", param_hint="LP_TOKEN")

    from .pipeline import get_fair_price

    try:
        fair_rate = asyncio.run(get_fair_price(state, lp_token))
    except FairPriceError as exc:
        if as_json:
            typer.echo(json.dumps(exc.to_dict(), indent=2))
        else:
            format_error_panel(exc)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(dumps(fair_rate))
    else:
        format_fair_rate_table(fair_rate)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
