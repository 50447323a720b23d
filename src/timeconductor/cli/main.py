"""
Main CLI application using Typer.

Logging is configured once per invocation before any command runs.
"""

from __future__ import annotations

from typing import Optional

import typer

from ..infra.logging import configure_logging
from .commands import conductor

app = typer.Typer(help="Time conductor operator CLI")

app.add_typer(conductor.app, name="conductor", help="Time conductor mode operations")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL for this invocation"
    ),
):
    """Time conductor operator CLI."""
    configure_logging(log_level)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
