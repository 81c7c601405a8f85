"""CLI commands for redeem codes, keys, and users."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from vicat_keys.bootstrap import build_default_service_container
from vicat_keys.core.exceptions import VicatError
from vicat_keys.services import ServiceContainer

# The CLI opens the data file with its own lock, separate from a running server.
STOPPED_SERVER_NOTE = "Commands that change state must only be run while the server is stopped."

codes_app = typer.Typer(name="codes", help=f"Manage redeem codes. {STOPPED_SERVER_NOTE}")
keys_app = typer.Typer(name="keys", help=f"Inspect and blacklist keys. {STOPPED_SERVER_NOTE}")
users_app = typer.Typer(name="users", help="Inspect user accounts")
console = Console()


def get_services() -> ServiceContainer:
    """Get the service container bound to the configured data file."""
    return build_default_service_container()


def _fail(exc: VicatError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc.message}")
    return typer.Exit(1)


@codes_app.command("create")
def create_codes(
    count: int = typer.Option(1, "--count", "-c", help="Number of codes (1-100)"),
) -> None:
    """Create new redeem codes and print them."""
    services = get_services()
    try:
        codes = services.keys.issue_redeem_codes(count)
    except VicatError as e:
        raise _fail(e) from e

    console.print(f"\n[green]Created {len(codes)} redeem code(s):[/green]\n")
    for code in codes:
        console.print(f"[bold cyan]{code}[/bold cyan]")


@codes_app.command("list")
def list_codes(
    unused_only: bool = typer.Option(False, "--unused", "-u", help="Hide redeemed codes"),
) -> None:
    """List redeem codes."""
    codes = get_services().keys.list_redeem_codes()
    if unused_only:
        codes = [c for c in codes if not c.redeemed]

    if not codes:
        console.print("[dim]No redeem codes found.[/dim]")
        return

    table = Table(title="Redeem Codes")
    table.add_column("Code", style="cyan")
    table.add_column("Status")
    table.add_column("Redeemed By")
    table.add_column("Created")

    for code in codes:
        status_str = "[yellow]redeemed[/yellow]" if code.redeemed else "[green]unused[/green]"
        table.add_row(
            code.code,
            status_str,
            code.redeemed_by or "-",
            code.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@codes_app.command("delete")
def delete_code(code: str = typer.Argument(..., help="Unused redeem code to delete")) -> None:
    """Delete an unused redeem code."""
    try:
        get_services().keys.delete_redeem_code(code)
    except VicatError as e:
        raise _fail(e) from e
    console.print(f"[green]Redeem code '{code}' deleted.[/green]")


@keys_app.command("list")
def list_keys() -> None:
    """List active and blacklisted keys."""
    listing = get_services().keys.list_all_keys()

    if not listing.keys and not listing.blacklist:
        console.print("[dim]No keys found.[/dim]")
        return

    table = Table(title="Keys")
    table.add_column("Key", style="cyan")
    table.add_column("Status")
    table.add_column("Owner")
    table.add_column("Since")

    for key in listing.keys:
        table.add_row(
            key.key,
            f"[green]{key.status}[/green]",
            key.user_id,
            key.created_at.strftime("%Y-%m-%d"),
        )
    for entry in listing.blacklist:
        table.add_row(
            entry.key,
            "[red]blacklisted[/red]",
            "-",
            entry.blacklisted_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@keys_app.command("blacklist")
def blacklist_key(
    key: str = typer.Argument(..., help="Key to blacklist"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Permanently blacklist a key."""
    if not force:
        confirm = typer.confirm(f"Are you sure you want to blacklist key '{key}'?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            raise typer.Exit(0)

    try:
        get_services().keys.blacklist_key(key)
    except VicatError as e:
        raise _fail(e) from e
    console.print(f"[green]Key '{key}' has been blacklisted.[/green]")


@keys_app.command("check")
def check_key(key: str = typer.Argument(..., help="Key to check")) -> None:
    """Check a key the same way the public endpoint does."""
    verdict = get_services().keys.check_key(key)
    if verdict.ok:
        console.print(f"[green]ok[/green] {verdict.message}")
        return
    console.print(f"[red]denied[/red] {verdict.message}")
    raise typer.Exit(1)


@users_app.command("list")
def list_users() -> None:
    """List registered users."""
    users = get_services().accounts.list_users()

    if not users:
        console.print("[dim]No users found.[/dim]")
        return

    table = Table(title="Users")
    table.add_column("Username", style="cyan")
    table.add_column("Email")
    table.add_column("Keys")
    table.add_column("Created")

    for user in users:
        table.add_row(
            user.username,
            user.email or "-",
            str(len(user.keys)),
            user.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


__all__ = ["STOPPED_SERVER_NOTE", "codes_app", "console", "get_services", "keys_app", "users_app"]
