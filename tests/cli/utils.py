"""
CLI test utilities.

Provides helper functions for testing CLI commands using Typer's CliRunner.
"""

from __future__ import annotations

from typer.testing import CliRunner

from timeconductor.cli.main import app


def run_cli(args: list[str]) -> tuple[int, str]:
    """
    Run the CLI with logging quietened so stdout carries only command output.

    Returns:
        Tuple of (exit_code, stdout)
    """
    runner = CliRunner()
    result = runner.invoke(app, ["--log-level", "ERROR", *args])
    return result.exit_code, result.stdout
