"""Blocking invocation of init control binaries.

CommandRunner is the only place that spawns processes. Providers receive
an instance at construction time, which lets tests substitute a scripted
runner. Calls block until the child exits; there is no timeout.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from initswitch.core.logging import get_logger
from initswitch.providers.exceptions import CommandError

_logger = get_logger("commands")


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> CommandResult:
        """Return self, or raise CommandError on a non-zero exit."""
        if not self.ok:
            raise CommandError(self.argv, self.returncode, self.stderr)
        return self


class CommandRunner:
    """Runs commands synchronously and captures their output.

    Args:
        drop_env: Environment variables removed from the child environment.
    """

    def __init__(self, drop_env: Sequence[str] = ()) -> None:
        self._drop_env = frozenset(drop_env)

    def _environment(self) -> Mapping[str, str] | None:
        if not self._drop_env:
            return None
        return {k: v for k, v in os.environ.items() if k not in self._drop_env}

    def run(self, argv: Sequence[str]) -> CommandResult:
        """Run ``argv`` and return its result regardless of exit status.

        Raises:
            CommandError: If the command could not be spawned.
        """
        argv = tuple(argv)
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                env=self._environment(),
                check=False,
            )
        except OSError as e:
            _logger.error("command_spawn_failed", argv=list(argv), error=str(e))
            raise CommandError(argv, None, str(e)) from e

        _logger.debug(
            "command_finished",
            argv=list(argv),
            returncode=completed.returncode,
        )
        return CommandResult(
            argv=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
