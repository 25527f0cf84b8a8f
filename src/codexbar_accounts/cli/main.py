"""Entry point for the codexbar-accounts command line."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from codexbar_accounts import __version__
from codexbar_accounts.cli.commands.accounts import (
    bootstrap_command,
    create_command,
    home_command,
    info_command,
    list_command,
    record_login_command,
    select_command,
)
from codexbar_accounts.config.settings import get_settings
from codexbar_accounts.core.logging import setup_logging
from codexbar_accounts.exceptions import ConfigurationError
from codexbar_accounts.store import CodexAccountStore


app = typer.Typer(
    name="codexbar-accounts",
    help="Manage multiple Codex CLI accounts",
    no_args_is_help=True,
)

console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"codexbar-accounts {__version__}")
        raise typer.Exit()


@app.callback()
def app_main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override the configured log level"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Discover, create and select Codex accounts."""
    overrides = {"log_level": log_level} if log_level else {}
    try:
        settings = get_settings(config, **overrides)
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1) from e

    setup_logging(settings.log_level, json_logs=settings.log_json)
    ctx.obj = CodexAccountStore.from_settings(settings)


app.command(name="bootstrap")(bootstrap_command)
app.command(name="list")(list_command)
app.command(name="create")(create_command)
app.command(name="select")(select_command)
app.command(name="info")(info_command)
app.command(name="home")(home_command)
app.command(name="record-login")(record_login_command)


def main() -> None:
    app()
