"""Rich output formatting for the initswitch CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from initswitch.providers.compat import ServiceStatus

# Command modules print through this console; --quiet is honoured by the
# is_quiet() guards in each command, not by the Console itself.
console = Console()


def format_flag(value: bool | None, yes: str, no: str) -> str:
    """Render a tri-state flag with consistent colours."""
    if value is None:
        return "[dim]-[/dim]"
    return f"[green]{yes}[/green]" if value else f"[yellow]{no}[/yellow]"


def build_status_table(status: ServiceStatus) -> Table:
    """Two-column table describing a job."""
    table = Table(title=f"Job: {status.job}", show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    managed = status.managed_by if status.managed_by != "none" else "[red]not installed[/red]"
    table.add_row("Managed by", managed)
    if status.tier is not None:
        table.add_row("Upstart tier", status.tier.value)
    table.add_row("Enabled", format_flag(status.enabled, "enabled", "disabled"))
    table.add_row("Running", format_flag(status.running, "running", "stopped"))
    for label, path in (
        ("Job file", status.job_file),
        ("Override file", status.override_file),
        ("Init script", status.init_script),
    ):
        if path is not None:
            table.add_row(label, str(path))
    return table
