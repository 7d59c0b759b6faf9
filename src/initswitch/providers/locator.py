"""Job file lookup across the upstart search paths."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from initswitch.providers.exceptions import JobNotFoundError


class JobFileKind(str, Enum):
    """Job file type; the value is the file extension."""

    PRIMARY = "conf"
    OVERRIDE = "override"


def validate_job_name(job: str) -> str:
    """Reject names that can't be a single file name.

    Raises:
        ValueError: For empty names or names containing a path separator or NUL.
    """
    if not job or job in (".", ".."):
        raise ValueError(f"Invalid job name: {job!r}")
    if "/" in job or "\0" in job:
        raise ValueError(f"Invalid job name: {job!r}")
    return job


class JobLocator:
    """Resolves a job name to the first matching file in ``search_paths``.

    Only inspects the filesystem; never creates or modifies anything.
    """

    def __init__(self, search_paths: Sequence[Path]) -> None:
        self._search_paths = tuple(search_paths)

    @staticmethod
    def filename(job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> str:
        return f"{validate_job_name(job)}.{kind.value}"

    def find(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> Path | None:
        """Return the path of the job file, or None when there is none."""
        filename = self.filename(job, kind)
        for directory in self._search_paths:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def locate(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> Path:
        """Like :meth:`find` but raises when the file doesn't exist.

        Raises:
            JobNotFoundError: If no search path holds the file.
        """
        path = self.find(job, kind)
        if path is None:
            raise JobNotFoundError(job, self.filename(job, kind))
        return path
