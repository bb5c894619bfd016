"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import RegistryClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run() -> None:
    """Check configuration and registry connectivity."""

    settings = AppSettings()

    table = Table(title="modelctl Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Server URL", "OK", settings.server_url)
    if settings.token:
        table.add_row("Auth token", "OK", "Token cookie will be sent")
    else:
        table.add_row("Auth token", "OPTIONAL", "No token set -> anonymous requests")
    table.add_row("User config", "OK", str(get_user_env_file()))

    ok_http, detail_http = RegistryClient(settings).ping()
    table.add_row("Registry connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] set MODELCTL_SERVER_URL (or run `modelctl doctor setup`) "
            "to point at a running server."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    server_url = typer.prompt("Server URL", default=settings.server_url, show_default=True).strip()
    token = typer.prompt(
        "Auth token (leave empty for none)", default="", show_default=False, hide_input=True
    ).strip()

    if not server_url:
        raise typer.BadParameter("server URL is required")

    values = {"MODELCTL_SERVER_URL": server_url}
    if token:
        values["MODELCTL_TOKEN"] = token
    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
