"""CLI commands for the vicat key server."""

import typer
import uvicorn

from vicat_keys.cli.admin import admin_app, import_legacy
from vicat_keys.cli.keys import STOPPED_SERVER_NOTE, codes_app, keys_app, users_app
from vicat_keys.core.config import config

main_app = typer.Typer(
    name="vicat-keys",
    help=f"Vicat key server CLI. {STOPPED_SERVER_NOTE}",
    no_args_is_help=True,
)
main_app.add_typer(codes_app, name="codes")
main_app.add_typer(keys_app, name="keys")
main_app.add_typer(users_app, name="users")
main_app.add_typer(admin_app, name="admin")
main_app.command("import-legacy")(import_legacy)


@main_app.command("serve")
def serve(
    host: str = typer.Option(config.HOST, "--host", help="Bind address"),
    port: int = typer.Option(config.PORT, "--port", "-p", help="Bind port"),
) -> None:
    """Run the HTTP API."""
    uvicorn.run("vicat_keys.api_factory:create_app", host=host, port=port, factory=True)


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
