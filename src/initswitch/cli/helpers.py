"""Shared utilities for initswitch CLI commands.

- Output level state (--verbose / --quiet)
- Logging configuration from global options and the config file
- Provider construction
- Uniform handling of provider errors
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

import typer
from pydantic import ValidationError
from rich.console import Console

from initswitch.core.config import ProviderConfig
from initswitch.core.logging import configure_logging, get_logger
from initswitch.providers.compat import CompatibilityProvider
from initswitch.providers.exceptions import ServiceError
from initswitch.providers.factory import create_provider

_logger = get_logger("cli")

# Exit status for provider or configuration errors. 1 is reserved for
# queries answering "no".
EXIT_ERROR = 2


class OutputLevel(str, Enum):
    """Output verbosity level."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


@dataclass
class CliState:
    """Global option values collected by the Typer callbacks."""

    output_level: OutputLevel = OutputLevel.NORMAL
    config_file: Path | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_file: Path | None = None
    log_format: Literal["json", "console", "both"] | None = None
    logging_configured: bool = False


_state = CliState()


def get_state() -> CliState:
    return _state


def reset_state() -> None:
    """Reset all global CLI state (used by tests)."""
    global _state
    _state = CliState()


def set_output_level(level: OutputLevel) -> None:
    _state.output_level = level


def is_verbose() -> bool:
    return _state.output_level == OutputLevel.VERBOSE


def is_quiet() -> bool:
    return _state.output_level == OutputLevel.QUIET


def set_config_file(path: Path | None) -> None:
    _state.config_file = path


def set_log_level(level: str) -> None:
    _state.log_level = level.upper()  # type: ignore[assignment]


def set_log_file(path: Path | None) -> None:
    _state.log_file = path


def set_log_format(fmt: str) -> None:
    _state.log_format = fmt  # type: ignore[assignment]


def load_config(console: Console) -> ProviderConfig:
    """Load the provider configuration named by --config, or the defaults.

    Raises:
        typer.Exit: If the file can't be read or fails validation.
    """
    if _state.config_file is None:
        return ProviderConfig()
    try:
        return ProviderConfig.from_yaml(_state.config_file)
    except OSError as e:
        console.print(f"[red]Cannot read config file:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None


def configure_global_logging(console: Console, config: ProviderConfig) -> None:
    """Configure logging once, CLI options taking precedence over the config file.

    Raises:
        typer.Exit: If logging configuration fails.
    """
    if _state.logging_configured:
        return
    level = _state.log_level or ("DEBUG" if is_verbose() else config.log_level)
    try:
        configure_logging(
            level=level,
            format=_state.log_format or config.log_format,
            file_path=_state.log_file or config.log_file,
        )
    except (ValueError, AttributeError) as e:
        console.print(f"[red]Logging configuration error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None
    _state.logging_configured = True


def get_provider(console: Console) -> CompatibilityProvider:
    """Build the provider for a command, configuring logging on first use."""
    config = load_config(console)
    configure_global_logging(console, config)
    return create_provider(config)


@contextmanager
def handle_service_errors(console: Console, job: str) -> Iterator[None]:
    """Turn provider errors into a red message and exit status 2."""
    try:
        yield
    except ServiceError as e:
        _logger.debug("command_failed", job=job, error=str(e), error_type=type(e).__name__)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None
