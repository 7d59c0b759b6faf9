"""Control commands: ``initswitch start/stop/restart/reload/is-running``.

Thin Typer wrappers; the running-state checks that make these commands
idempotent live in the providers.
"""

from __future__ import annotations

from collections.abc import Callable

import typer

from ..helpers import get_provider, handle_service_errors, is_quiet, is_verbose
from ..output import console


def _run_action(job: str, action: str, past: str) -> None:
    provider = get_provider(console)
    operation: Callable[[str], None] = getattr(provider, action)
    with handle_service_errors(console, job):
        operation(job)
        running = provider.is_running(job) if is_verbose() else None
    if not is_quiet():
        console.print(f"[green]{past}[/green] {job}")
        if running is not None:
            console.print(f"  running: {running}")


def start(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Start the job unless it is already running."""
    _run_action(job, "start", "Started")


def stop(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Stop the job if it is running."""
    _run_action(job, "stop", "Stopped")


def restart(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Restart the job, or start it if it is stopped."""
    _run_action(job, "restart", "Restarted")


def reload(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Reload the job's configuration, restarting it if reload fails."""
    _run_action(job, "reload", "Reloaded")


def is_running(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Exit 0 if the job is running, 1 otherwise."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        running = provider.is_running(job)
    if not is_quiet():
        console.print("running" if running else "stopped")
    raise typer.Exit(0 if running else 1)
