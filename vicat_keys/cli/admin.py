"""CLI commands for the admin account and data migration."""

from __future__ import annotations

from pathlib import Path

import typer

from vicat_keys.adapters.document_store import TinyDBDocumentStore, load_legacy_document
from vicat_keys.cli.keys import STOPPED_SERVER_NOTE, console, get_services
from vicat_keys.core.exceptions import VicatError

admin_app = typer.Typer(name="admin", help=f"Manage the admin account. {STOPPED_SERVER_NOTE}")


@admin_app.command("reset")
def reset_admin(
    username: str = typer.Option(..., "--username", "-u", help="New admin username"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True
    ),
) -> None:
    """Re-create the admin account with new credentials."""
    try:
        get_services().accounts.reset_admin(username, password)
    except VicatError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    console.print(f"[green]Admin account '{username}' re-created.[/green]")


def import_legacy(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Legacy data.json"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing state"),
) -> None:
    """Load a legacy data.json written by the earlier Node deployment.

    Run only while the server is stopped.
    """
    store = TinyDBDocumentStore()
    try:
        current = store.load()
        if (current.admin or current.users) and not force:
            console.print("[red]Error:[/red] state already exists; pass --force to overwrite")
            raise typer.Exit(1)
        document = load_legacy_document(path)
        store.save(document)
    except VicatError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    finally:
        store.close()

    console.print(
        f"[green]Imported {len(document.users)} user(s), "
        f"{len(document.redeem_codes)} redeem code(s), "
        f"{len(document.active_keys)} active key(s), "
        f"{len(document.blacklist)} blacklisted key(s).[/green]"
    )


__all__ = ["admin_app", "import_legacy"]
