"""`modelctl model` commands."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console

from adapters.http_client import RegistryClient
from cli.ui_components import render_error, render_import_report
from core.config import AppSettings
from core.domain.errors import ModelCtlError, UsageError
from core.interfaces.transport import RegistryTransport
from core.services.import_pipeline import PipelineHooks, import_model

USAGE_MESSAGE = (
    "Usage: modelctl model import [ file | filePath | URL ]\n"
    "Run 'modelctl model import --help' to see detailed help message"
)

USAGE_EXIT_CODE = 2

_IMPORT_EXAMPLES = """
Examples:

  # Import a model from a file, directory or URL

  modelctl model import -f [URI]

  # Import a model from a tar.gz file

  modelctl model import -f path/to/model.tar.gz

  # Import a model from a directory (packed as tar.gz before upload)

  modelctl model import path/to/model

  # Import a model using CSV files (model, component and relationship CSVs)

  modelctl model import -f path/to/csv-directory
"""

app = typer.Typer(no_args_is_help=True, help="Manage models in the registry.")

# Swapped in tests.
transport_factory: Callable[[AppSettings], RegistryTransport] = RegistryClient


def resolve_source(file: str | None, args: list[str]) -> str:
    """Pick the input from `--file` or the single positional argument."""

    if not file and not args:
        raise UsageError(f"[ file | filepath | URL ] isn't specified\n\n{USAGE_MESSAGE}")
    if len(args) > 1:
        raise UsageError(f"too many arguments\n\n{USAGE_MESSAGE}")
    if file and args:
        raise UsageError(f"use either --file or a positional argument, not both\n\n{USAGE_MESSAGE}")
    return file or args[0]


def _console(ctx: typer.Context) -> Console:
    obj = ctx.find_root().obj or {}
    return Console(no_color=bool(obj.get("no_color", False)), highlight=False)


@app.command(name="import", epilog=_IMPORT_EXAMPLES)
def import_command(
    ctx: typer.Context,
    sources: list[str] | None = typer.Argument(
        None,
        help="File, directory or URL to import.",
        show_default=False,
    ),
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Specify path to the file or directory.",
    ),
) -> None:
    """Import models from a file, a directory, a directory of CSVs or a URL."""

    console = _console(ctx)
    try:
        source = resolve_source(file, list(sources or []))
    except UsageError as exc:
        render_error(console, exc)
        raise typer.Exit(code=USAGE_EXIT_CODE) from exc

    settings = AppSettings()
    hooks = PipelineHooks(
        report=lambda report: render_import_report(console, report),
        info=console.print,
    )
    try:
        import_model(
            source,
            transport=transport_factory(settings),
            registry_home=settings.registry_home,
            hooks=hooks,
        )
    except ModelCtlError as exc:
        render_error(console, exc)
        raise typer.Exit(code=1) from exc
