"""Main entry point for the modelctl command line interface."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.doctor import app as doctor_app
from cli.model import app as model_app


def create_app() -> typer.Typer:
    """Create the root Typer application."""

    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="modelctl - import models into a model registry.",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            help="Root logging level.",
            show_default=True,
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        ctx.obj.update({"log_level": log_level.upper(), "no_color": no_color})
        _configure_logging(log_level)

    app.add_typer(model_app, name="model")
    app.add_typer(doctor_app, name="doctor")
    return app


def _configure_logging(level_name: str) -> None:
    resolved = getattr(logging, level_name.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app = create_app()


def run() -> None:
    app()
