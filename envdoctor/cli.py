"""CLI do envdoctor usando Typer."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from envdoctor import __version__
from envdoctor.config import configure, get_config

app = typer.Typer(
    name="envdoctor",
    help="Diagnose and fix the local development environment",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"envdoctor version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """envdoctor - environment diagnostics."""
    pass


def _setup_logging() -> None:
    from envdoctor.utils.logging import configure_logging

    try:
        configure_logging(get_config())
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from None


def _load(checks: list[Path] | None) -> list:
    from envdoctor.checks import default_checks
    from envdoctor.exceptions import CheckLoadError
    from envdoctor.plugins import load_checks

    if not checks:
        return default_checks()

    try:
        return load_checks(checks)
    except CheckLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from None


@app.command("run")
def run(
    checks: list[Path] | None = typer.Option(
        None, "--checks", "-c", help="Python file or directory exposing CHECKS"
    ),
    output_json: bool = typer.Option(False, "--json", help="Print the final report as JSON"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Render logs as JSON"),
) -> None:
    """Run every check and fix what can be fixed."""
    from envdoctor.doctor import Doctor
    from envdoctor.reporting import ConsoleSink

    configure(
        color=False if no_color else None,
        log_level=log_level,
        json_logs=True if json_logs else None,
    )
    _setup_logging()
    config = get_config()

    doctor = Doctor(sink=ConsoleSink(color=None if config.color else False, err=output_json))
    doctor.register(_load(checks))

    report = asyncio.run(doctor.run())

    if output_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

    if not report.healthy:
        raise typer.Exit(1)


@app.command("list-checks")
def list_checks(
    checks: list[Path] | None = typer.Option(
        None, "--checks", "-c", help="Python file or directory exposing CHECKS"
    ),
) -> None:
    """List the checks that would run, in order."""
    from envdoctor.checks import check_name

    _setup_logging()
    for i, check in enumerate(_load(checks), start=1):
        mode = "auto" if check.autofix else "manual"
        typer.echo(f"  {i:>2}. {check_name(check)} ({mode})")


if __name__ == "__main__":
    app()
