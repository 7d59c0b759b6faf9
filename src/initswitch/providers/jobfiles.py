"""Reading and writing upstart job and override files."""

from __future__ import annotations

import os
from pathlib import Path

from initswitch.core.logging import get_logger
from initswitch.providers.exceptions import JobFileError
from initswitch.providers.locator import JobFileKind, JobLocator

_logger = get_logger("jobfiles")


class JobFileStore:
    """Whole-file access to a job's ``.conf`` and ``.override`` files.

    Override files are always written next to the job's ``.conf`` file.
    Writing empty override content deletes the override file instead of
    leaving an empty one behind.
    """

    def __init__(self, locator: JobLocator, file_mode: int = 0o644) -> None:
        self._locator = locator
        self._file_mode = file_mode

    @staticmethod
    def _read(path: Path) -> str:
        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise JobFileError(path, "read", str(e)) from e

    def read(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> str:
        """Return the content of a job file.

        The override file is the one next to the job's ``.conf`` file; a
        missing override reads as ``""``.

        Raises:
            JobNotFoundError: If the job's ``.conf`` file doesn't exist.
            JobFileError: If the file exists but can't be read.
        """
        if kind is JobFileKind.OVERRIDE:
            path = self.path_for(job, kind)
            return self._read(path) if path.is_file() else ""
        return self._read(self._locator.locate(job, kind))

    def path_for(self, job: str, kind: JobFileKind) -> Path:
        """Where ``kind`` lives for ``job``: the directory of its ``.conf`` file."""
        directory = self._locator.locate(job, JobFileKind.PRIMARY).parent
        return directory / self._locator.filename(job, kind)

    def write(self, job: str, kind: JobFileKind, content: str) -> None:
        """Replace a job file with ``content``.

        Empty content deletes an existing override file and is a no-op for
        the ``.conf`` file.

        Raises:
            JobNotFoundError: If the job's ``.conf`` file doesn't exist.
            JobFileError: On any write, chmod or unlink failure.
        """
        path = self.path_for(job, kind)
        if content:
            self._write_atomic(path, content)
            _logger.info("job_file_written", path=str(path), kind=kind.value)
        elif kind is JobFileKind.OVERRIDE and path.is_file():
            self._unlink(path)
        else:
            _logger.debug("job_file_write_skipped", path=str(path), kind=kind.value)

    def find(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> Path | None:
        """Path of an existing job file, or None.

        Only the override next to the located ``.conf`` counts; overrides in
        other search paths are ignored.
        """
        primary = self._locator.find(job, JobFileKind.PRIMARY)
        if primary is None or kind is JobFileKind.PRIMARY:
            return primary
        path = primary.parent / self._locator.filename(job, kind)
        return path if path.is_file() else None

    def delete(self, job: str, kind: JobFileKind) -> bool:
        """Delete a job file if present. Returns whether a file was removed."""
        path = self.find(job, kind)
        if path is None:
            return False
        self._unlink(path)
        return True

    def _write_atomic(self, path: Path, content: str) -> None:
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            with open(tmp, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.chmod(tmp, self._file_mode)
            tmp.replace(path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise JobFileError(path, "write", str(e)) from e

    @staticmethod
    def _unlink(path: Path) -> None:
        try:
            path.unlink()
        except OSError as e:
            raise JobFileError(path, "unlink", str(e)) from e
        _logger.info("job_file_deleted", path=str(path))
