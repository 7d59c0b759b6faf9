"""Upstart service provider.

See: http://upstart.ubuntu.com

Enablement is decided by the job's ``start on`` and ``manual`` stanzas.
How those are edited depends on the installed upstart version, see
:mod:`initswitch.providers.enablement`.
"""

from __future__ import annotations

import re
from pathlib import Path

from initswitch.core.config import UpstartConfig
from initswitch.core.logging import get_logger
from initswitch.providers.commands import CommandRunner
from initswitch.providers.enablement import JobTexts, TierStrategy, strategy_for
from initswitch.providers.exceptions import JobNotFoundError
from initswitch.providers.jobfiles import JobFileStore
from initswitch.providers.locator import JobFileKind, JobLocator, validate_job_name
from initswitch.providers.version import VersionResolver, VersionTier

_logger = get_logger("upstart")

# initctl talks to a user session instance when this is set.
SESSION_ENV_VAR = "UPSTART_SESSION"

# "<job> start/running, process 42": the goal follows the job name.
_START_GOAL_RE = re.compile(r"\sstart/")


class UpstartProvider:
    """Manages jobs defined by ``<job>.conf`` files in the upstart search paths."""

    def __init__(
        self,
        config: UpstartConfig | None = None,
        runner: CommandRunner | None = None,
        resolver: VersionResolver | None = None,
    ) -> None:
        self.config = config or UpstartConfig()
        self._runner = runner or CommandRunner(
            drop_env=(SESSION_ENV_VAR,) if self.config.drop_session_env else ()
        )
        self._resolver = resolver or VersionResolver(self._runner, self.config.initctl)
        self._locator = JobLocator(self.config.job_paths)
        self._files = JobFileStore(self._locator, self.config.file_mode)

    # ─── Job files ─────────────────────────────────────────────────

    def is_upstart(self, job: str) -> bool:
        """Whether ``job`` has a ``.conf`` file in the search paths."""
        return self._locator.find(job, JobFileKind.PRIMARY) is not None

    def find_job_file(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> Path | None:
        """Path of the job's ``.conf`` file, or of the ``.override`` next to it."""
        return self._files.find(job, kind)

    def get_job_file_path(self, job: str, kind: JobFileKind = JobFileKind.PRIMARY) -> Path:
        """Like :meth:`find_job_file` but raises when there is no such file.

        Raises:
            JobNotFoundError: If the file doesn't exist.
        """
        path = self.find_job_file(job, kind)
        if path is None:
            raise JobNotFoundError(job, self._locator.filename(job, kind))
        return path

    def version(self) -> str:
        return self._resolver.resolve_version()

    def tier(self) -> VersionTier:
        return self._resolver.tier()

    def _strategy(self) -> TierStrategy:
        return strategy_for(self.tier())

    def _read_texts(self, job: str, strategy: TierStrategy) -> JobTexts:
        primary = self._files.read(job, JobFileKind.PRIMARY)
        if not strategy.reads_override:
            return JobTexts(primary)
        return JobTexts(primary, self._files.read(job, JobFileKind.OVERRIDE))

    # ─── Enablement ────────────────────────────────────────────────

    def has_service(self, job: str) -> bool:
        return self.is_upstart(job)

    def is_enabled(self, job: str) -> bool:
        validate_job_name(job)
        strategy = self._strategy()
        return strategy.is_enabled(self._read_texts(job, strategy))

    def enable(self, job: str) -> None:
        validate_job_name(job)
        strategy = self._strategy()
        edit = strategy.enable(self._read_texts(job, strategy), self.config.default_start_on)
        self._files.write(job, edit.kind, edit.content)
        _logger.info("job_enabled", job=job, tier=strategy.tier.value, file=edit.kind.value)

    def disable(self, job: str) -> None:
        validate_job_name(job)
        strategy = self._strategy()
        edit = strategy.disable(self._read_texts(job, strategy))
        self._files.write(job, edit.kind, edit.content)
        _logger.info("job_disabled", job=job, tier=strategy.tier.value, file=edit.kind.value)

    def remove(self, job: str) -> None:
        """Stop the job and delete its ``.conf`` and ``.override`` files.

        A job without a ``.conf`` file is left alone.
        """
        if not self.is_upstart(job):
            return
        self.stop(job)
        for kind in (JobFileKind.OVERRIDE, JobFileKind.PRIMARY):
            self._files.delete(job, kind)
        _logger.info("job_removed", job=job)

    # ─── Control ───────────────────────────────────────────────────

    def _control(self, verb: str, job: str, *, check: bool = True) -> bool:
        self._locator.locate(job, JobFileKind.PRIMARY)
        result = self._runner.run([self.config.initctl, verb, job])
        if check:
            result.check()
        return result.ok

    def is_running(self, job: str) -> bool:
        """Whether ``initctl status`` reports the job in a start goal."""
        self._locator.locate(job, JobFileKind.PRIMARY)
        result = self._runner.run([self.config.initctl, "status", job])
        return _START_GOAL_RE.search(result.stdout) is not None

    def start(self, job: str) -> None:
        if not self.is_running(job):
            self._control("start", job)

    def stop(self, job: str) -> None:
        if self.is_running(job):
            self._control("stop", job)

    def restart(self, job: str) -> None:
        if self.is_running(job):
            self._control("restart", job)
        else:
            self.start(job)

    def reload(self, job: str) -> None:
        """Reload a running job, falling back to a restart if that fails."""
        if not self.is_running(job):
            self.start(job)
            return
        if not self._control("reload", job, check=False):
            _logger.warning("job_reload_failed_restarting", job=job)
            self._control("restart", job)
