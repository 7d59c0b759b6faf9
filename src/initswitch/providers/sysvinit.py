"""SysV init script provider for Debian-like distributions.

A service is an init script ``/etc/init.d/<job>``. It is enabled for a
runlevel when an ``S<NN><job>`` link exists in ``/etc/rc<runlevel>.d``;
links are managed with ``update-rc.d``.
"""

from __future__ import annotations

import re
from pathlib import Path

from initswitch.core.config import SysvinitConfig
from initswitch.core.logging import get_logger
from initswitch.providers.commands import CommandRunner
from initswitch.providers.exceptions import CommandError, JobFileError, JobNotFoundError
from initswitch.providers.locator import validate_job_name

_logger = get_logger("sysvinit")

_RUNLEVEL_RE = re.compile(r"^[0-6Ss]$")


class SysvinitProvider:
    """Manages services backed by a single init script."""

    def __init__(
        self,
        config: SysvinitConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config or SysvinitConfig()
        self._runner = runner or CommandRunner()

    def script_path(self, job: str) -> Path | None:
        """First init script named ``job`` in the search paths, if any."""
        validate_job_name(job)
        for directory in self.config.script_paths:
            candidate = directory / job
            if candidate.is_file():
                return candidate
        return None

    def _require_script(self, job: str) -> Path:
        path = self.script_path(job)
        if path is None:
            raise JobNotFoundError(job, job)
        return path

    def has_service(self, job: str) -> bool:
        return self.script_path(job) is not None

    # ─── Enablement ────────────────────────────────────────────────

    def current_runlevel(self) -> str:
        """Current runlevel as reported by ``runlevel``, or the configured default."""
        try:
            result = self._runner.run([self.config.runlevel_command])
        except CommandError:
            _logger.debug("runlevel_unavailable", command=self.config.runlevel_command)
            return self.config.default_runlevel
        tokens = result.stdout.split()
        if result.ok and tokens and _RUNLEVEL_RE.match(tokens[-1]):
            return tokens[-1]
        return self.config.default_runlevel

    def is_enabled(self, job: str) -> bool:
        self._require_script(job)
        rc_dir = self.config.rc_root / f"rc{self.current_runlevel()}.d"
        if not rc_dir.is_dir():
            return False
        link_re = re.compile(rf"^S\d\d{re.escape(job)}$")
        return any(link_re.match(entry.name) for entry in rc_dir.iterdir())

    def _update_rc_d(self, *args: str) -> None:
        self._runner.run([self.config.update_rc_d, *args]).check()

    def enable(self, job: str) -> None:
        self._require_script(job)
        self._update_rc_d(job, "defaults")
        self._update_rc_d(job, "enable")
        _logger.info("service_enabled", job=job)

    def disable(self, job: str) -> None:
        self._require_script(job)
        self._update_rc_d(job, "defaults")
        self._update_rc_d(job, "disable")
        _logger.info("service_disabled", job=job)

    def remove(self, job: str) -> None:
        """Stop the service, drop its rc links and delete its init script."""
        path = self.script_path(job)
        if path is None:
            return
        self.stop(job)
        self._update_rc_d("-f", job, "remove")
        try:
            path.unlink()
        except OSError as e:
            raise JobFileError(path, "unlink", str(e)) from e
        _logger.info("service_removed", job=job, path=str(path))

    # ─── Control ───────────────────────────────────────────────────

    def _script(self, job: str, action: str, *, check: bool = True) -> bool:
        result = self._runner.run([str(self._require_script(job)), action])
        if check:
            result.check()
        return result.ok

    def is_running(self, job: str) -> bool:
        return self._script(job, "status", check=False)

    def start(self, job: str) -> None:
        if not self.is_running(job):
            self._script(job, "start")

    def stop(self, job: str) -> None:
        if self.is_running(job):
            self._script(job, "stop")

    def restart(self, job: str) -> None:
        if self.is_running(job):
            self._script(job, "restart")
        else:
            self.start(job)

    def reload(self, job: str) -> None:
        if not self.is_running(job):
            self.start(job)
            return
        if not self._script(job, "reload", check=False):
            _logger.warning("service_reload_failed_restarting", job=job)
            self._script(job, "restart")
