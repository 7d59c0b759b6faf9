"""Enablement commands: ``initswitch enable/disable/remove/is-enabled/has-service/status/tier``."""

from __future__ import annotations

import typer

from ..helpers import get_provider, handle_service_errors, is_quiet
from ..output import build_status_table, console


def _answer(value: bool, yes: str, no: str) -> None:
    if not is_quiet():
        console.print(yes if value else no)
    raise typer.Exit(0 if value else 1)


def is_enabled(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Exit 0 if the job starts automatically, 1 otherwise."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        enabled = provider.is_enabled(job)
    _answer(enabled, "enabled", "disabled")


def has_service(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Exit 0 if an upstart job or init script exists, 1 otherwise."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        found = provider.has_service(job)
    _answer(found, "installed", "not installed")


def enable(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Make the job start automatically at boot."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        provider.enable(job)
    if not is_quiet():
        console.print(f"[green]Enabled[/green] {job}")


def disable(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Stop the job from starting automatically at boot."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        provider.disable(job)
    if not is_quiet():
        console.print(f"[green]Disabled[/green] {job}")


def remove(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Stop the job and delete its job files and init script."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        provider.remove(job)
    if not is_quiet():
        console.print(f"[green]Removed[/green] {job}")


def status(job: str = typer.Argument(..., help="Job or service name")) -> None:
    """Show how the job is managed and whether it is enabled and running."""
    provider = get_provider(console)
    with handle_service_errors(console, job):
        info = provider.status(job)
    if not is_quiet():
        console.print(build_status_table(info))
    if info.managed_by == "none":
        raise typer.Exit(1)


def tier() -> None:
    """Show the upstart version and its job file tier."""
    provider = get_provider(console)
    with handle_service_errors(console, "-"):
        version = provider.upstart.version()
        version_tier = provider.upstart.tier()
    if not is_quiet():
        console.print(f"upstart {version} ([bold]{version_tier.value}[/bold])")
