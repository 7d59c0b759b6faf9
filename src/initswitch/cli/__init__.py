"""initswitch CLI.

The Typer app is assembled here: global options are handled by the
``main`` callback, which runs before every command and records option
values in :mod:`initswitch.cli.helpers`. Command implementations live in
``commands/``.

Package structure:
    cli/
    ├── __init__.py           # This file - app assembly
    ├── helpers.py            # Global option state, config/logging, error handling
    ├── output.py             # Rich console and tables
    └── commands/
        ├── enablement.py     # enable, disable, remove, is-enabled, has-service, status, tier
        └── control.py        # start, stop, restart, reload, is-running
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from initswitch import __version__

from . import helpers as helpers
from .commands import (
    disable,
    enable,
    has_service,
    is_enabled,
    is_running,
    reload,
    remove,
    restart,
    start,
    status,
    stop,
    tier,
)
from .helpers import (
    OutputLevel,
    set_config_file,
    set_log_file,
    set_log_format,
    set_log_level,
    set_output_level,
)
from .output import console

app = typer.Typer(
    name="initswitch",
    help="Enable, disable and control init jobs (upstart with SysV fallback)",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"initswitch v{__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    if value:
        set_output_level(OutputLevel.VERBOSE)


def quiet_callback(value: bool) -> None:
    if value:
        set_output_level(OutputLevel.QUIET)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        callback=verbose_callback,
        is_eager=True,
        help="Show detailed output and debug logs",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        callback=quiet_callback,
        is_eager=True,
        help="Print nothing; rely on the exit status",
    ),
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML provider configuration",
            envvar="INITSWITCH_CONFIG",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="INITSWITCH_LOG_LEVEL",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Path for log file output",
            envvar="INITSWITCH_LOG_FILE",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            help="Log format: json, console, or both",
            envvar="INITSWITCH_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """initswitch - enable, disable and control init jobs."""
    set_config_file(config_file)
    if log_level:
        set_log_level(log_level)
    if log_file:
        set_log_file(log_file)
    if log_format:
        set_log_format(log_format)


# Enablement
app.command(name="is-enabled")(is_enabled)
app.command()(enable)
app.command()(disable)
app.command()(remove)
app.command(name="has-service")(has_service)
app.command()(status)
app.command()(tier)

# Control
app.command()(start)
app.command()(stop)
app.command()(restart)
app.command()(reload)
app.command(name="is-running")(is_running)


__all__ = [
    "OutputLevel",
    "app",
    "console",
    "main",
]
