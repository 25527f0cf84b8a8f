"""CLI commands for listing, creating and selecting Codex accounts."""

from typing import Annotated

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from codexbar_accounts.bootstrap import BootstrapStatus, bootstrap_if_needed
from codexbar_accounts.login import (
    LoginOutcome,
    LoginResult,
    login_target,
    record_login_result,
)
from codexbar_accounts.models import CodexAccount
from codexbar_accounts.profile import load_account_info
from codexbar_accounts.store import CodexAccountStore


console = Console()


def get_store(ctx: typer.Context) -> CodexAccountStore:
    """Get the account store built by the app callback."""
    store = ctx.obj
    if not isinstance(store, CodexAccountStore):
        console.print("[red]Account store is not initialized.[/red]")
        raise typer.Exit(1)
    return store


def resolve_account(
    accounts: list[CodexAccount], target: str
) -> CodexAccount | None:
    """Find an account by 1-based list position or by id."""
    if target.isdigit():
        index = int(target) - 1
        if 0 <= index < len(accounts):
            return accounts[index]
        return None
    return next((a for a in accounts if a.id == target), None)


def accounts_table(accounts: list[CodexAccount], selected_id: str | None) -> Table:
    table = Table(title="Codex Accounts", box=box.ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Account", style="green")
    table.add_column("Plan")
    table.add_column("ID", style="cyan")
    table.add_column("Active")

    for position, account in enumerate(accounts, start=1):
        info = load_account_info(account.path)
        table.add_row(
            str(position),
            account.display_name,
            (info.plan if info else None) or "-",
            account.id,
            "[green]*[/green]" if account.id == selected_id else "",
        )
    return table


def bootstrap_command(ctx: typer.Context) -> None:
    """Prepare the accounts folder and activate a selection.

    Migrates an existing ~/.codex login on first run and creates an empty
    account when none exists.
    """
    store = get_store(ctx)
    result = bootstrap_if_needed(store)

    if result.status is BootstrapStatus.SKIPPED:
        console.print(
            f"[yellow]{store.home_env_var} is set; accounts are managed externally.[/yellow]"
        )
        return
    if result.status is BootstrapStatus.UNAVAILABLE:
        console.print(f"[red]Cannot create accounts folder {store.base_dir}.[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]{len(result.accounts)} account(s) ready.[/green] "
        f"Active: [cyan]{result.selected_id or '-'}[/cyan]"
    )


def list_command(ctx: typer.Context) -> None:
    """List accounts in display order."""
    store = get_store(ctx)
    accounts = store.accounts()

    if not accounts:
        console.print("[yellow]No accounts found.[/yellow]")
        return

    console.print(accounts_table(accounts, store.selected_account_id()))


def create_command(ctx: typer.Context) -> None:
    """Create a new empty account and make it active."""
    store = get_store(ctx)
    if not store.ensure_base_dir():
        console.print(f"[red]Cannot create accounts folder {store.base_dir}.[/red]")
        raise typer.Exit(1)

    account = store.create_account_and_activate()
    if account is None:
        console.print("[red]Failed to create account.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Account {account.id} created.[/green]")
    console.print(f"Log in with: CODEX_HOME={account.path} codex login")


def select_command(
    ctx: typer.Context,
    target: Annotated[
        str,
        typer.Argument(help="Account position from `list` (1-based) or account id"),
    ],
) -> None:
    """Select the active account."""
    store = get_store(ctx)
    accounts = store.accounts()
    account = resolve_account(accounts, target)

    if account is None or not store.activate_account(account.id, accounts):
        console.print(f"[red]Account {target} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Selected {account.display_name}.[/green]")


def info_command(ctx: typer.Context) -> None:
    """Show the selected account."""
    store = get_store(ctx)
    account = store.selected_account()

    if account is None:
        console.print("[yellow]No account selected.[/yellow]")
        raise typer.Exit(1)

    info = load_account_info(account.path)
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("ID", account.id)
    table.add_row("Email", (info.email if info else None) or "-")
    table.add_row("Plan", (info.plan if info else None) or "-")
    table.add_row("Path", str(account.path))
    console.print(table)


def home_command(ctx: typer.Context) -> None:
    """Print the directory the next `codex login` should use."""
    store = get_store(ctx)
    target = login_target(store)

    if target is None:
        console.print("[yellow]No account selected.[/yellow]")
        raise typer.Exit(1)

    typer.echo(str(target))


def record_login_command(
    ctx: typer.Context,
    outcome: Annotated[LoginOutcome, typer.Argument(help="Login outcome")],
    exit_code: Annotated[
        int | None,
        typer.Option("--exit-code", help="Exit code of the login process"),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", help="Raw output of the login process"),
    ] = "",
) -> None:
    """Record the outcome of a `codex login` run for the selected account."""
    store = get_store(ctx)
    result = LoginResult(outcome=outcome, output=output, exit_code=exit_code)

    if record_login_result(result, store.selected_account_id()):
        account = store.selected_account()
        label = account.display_name if account else "account"
        console.print(f"[green]Logged in as {label}.[/green]")
    else:
        console.print(f"[yellow]Login {outcome}.[/yellow]")
        raise typer.Exit(1)
