"""Exception hierarchy for initswitch service providers.

All provider exceptions inherit from ServiceError, so callers can catch
broadly (ServiceError) or narrowly (e.g. CommandError). JobNotFoundError
is also the signal that a job is not managed by a given engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ServiceError(Exception):
    """Base exception for all service provider errors."""


class JobNotFoundError(ServiceError):
    """Raised when no job definition exists in any search path."""

    def __init__(self, job: str, filename: str | None = None) -> None:
        self.job = job
        self.filename = filename or job
        super().__init__(f"Couldn't find the '{self.filename}' job file")


class JobFileError(ServiceError):
    """Raised when a located job file cannot be read, written or deleted."""

    def __init__(self, path: Path, action: str, reason: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"Couldn't {action} the '{path}' file: {reason}")


class CommandError(ServiceError):
    """Raised when a control command fails to spawn or exits non-zero.

    ``returncode`` is None when the command could not be started at all.
    """

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stderr = stderr
        command = " ".join(self.argv)
        if returncode is None:
            message = f"Couldn't execute '{command}'"
        else:
            message = f"'{command}' exited with status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class VersionParseError(ServiceError):
    """Raised when the control binary's version output can't be parsed."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"Couldn't determine upstart version from {output.strip()!r}")


class CompositeServiceError(ServiceError):
    """Raised when more than one engine failed during a single operation."""

    def __init__(self, operation: str, errors: Sequence[ServiceError]) -> None:
        self.operation = operation
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{operation} failed in {len(self.errors)} engines: {details}")
