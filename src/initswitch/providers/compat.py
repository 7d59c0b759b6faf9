"""Upstart provider with SysV init script fallback.

Debian-like systems running upstart still ship SysV init scripts for
many daemons, sometimes alongside an upstart job of the same name. The
:class:`CompatibilityProvider` answers every operation by asking upstart
first and consulting the init script engine for jobs upstart doesn't
manage, or in addition to upstart for enable/disable/remove.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from initswitch.core.logging import ServiceContext, get_logger, with_context
from initswitch.providers.base import ServiceProvider
from initswitch.providers.exceptions import CompositeServiceError, ServiceError
from initswitch.providers.locator import JobFileKind
from initswitch.providers.sysvinit import SysvinitProvider
from initswitch.providers.upstart import UpstartProvider
from initswitch.providers.version import VersionTier

_logger = get_logger("compat")

ManagedBy = Literal["upstart", "sysvinit", "none"]


@dataclass(frozen=True)
class ServiceStatus:
    """Snapshot of everything known about a job."""

    job: str
    managed_by: ManagedBy
    enabled: bool | None = None
    running: bool | None = None
    tier: VersionTier | None = None
    job_file: Path | None = None
    override_file: Path | None = None
    init_script: Path | None = None


class CompatibilityProvider:
    """Combines an upstart engine with a SysV init script engine.

    A job is upstart-managed when its ``.conf`` file exists; that check is
    repeated for every call and never cached.
    """

    def __init__(self, upstart: UpstartProvider, sysvinit: SysvinitProvider) -> None:
        self.upstart = upstart
        self.sysvinit = sysvinit

    def _context(self, job: str, operation: str) -> ServiceContext:
        return ServiceContext(job=job, operation=operation)

    @contextmanager
    def _engine(self, job: str, operation: str) -> Iterator[ServiceProvider]:
        """Yield the one engine answering for ``job``, logging under its name."""
        ctx = self._context(job, operation)
        if self.upstart.is_upstart(job):
            ctx, engine = ctx.with_provider("upstart"), self.upstart
        else:
            ctx, engine = ctx.with_provider("sysvinit"), self.sysvinit
        with with_context(ctx):
            yield engine

    # ─── Queries ───────────────────────────────────────────────────

    def has_service(self, job: str) -> bool:
        with with_context(self._context(job, "has_service")):
            return self.upstart.is_upstart(job) or self.sysvinit.has_service(job)

    def is_enabled(self, job: str) -> bool:
        """Enabled state from upstart if it manages the job, else from the init script.

        Raises:
            JobNotFoundError: If neither engine knows the job.
        """
        with self._engine(job, "is_enabled") as engine:
            return engine.is_enabled(job)

    def is_running(self, job: str) -> bool:
        with self._engine(job, "is_running") as engine:
            return engine.is_running(job)

    def status(self, job: str) -> ServiceStatus:
        """Collect a :class:`ServiceStatus` for ``job``."""
        with with_context(self._context(job, "status")):
            init_script = self.sysvinit.script_path(job)
            if self.upstart.is_upstart(job):
                return ServiceStatus(
                    job=job,
                    managed_by="upstart",
                    enabled=self.upstart.is_enabled(job),
                    running=self.upstart.is_running(job),
                    tier=self.upstart.tier(),
                    job_file=self.upstart.find_job_file(job, JobFileKind.PRIMARY),
                    override_file=self.upstart.find_job_file(job, JobFileKind.OVERRIDE),
                    init_script=init_script,
                )
            if init_script is not None:
                return ServiceStatus(
                    job=job,
                    managed_by="sysvinit",
                    enabled=self.sysvinit.is_enabled(job),
                    running=self.sysvinit.is_running(job),
                    init_script=init_script,
                )
            return ServiceStatus(job=job, managed_by="none")

    # ─── Enablement ────────────────────────────────────────────────

    def enable(self, job: str) -> None:
        """Enable the upstart job and any init script of the same name."""
        with with_context(self._context(job, "enable")):
            if self.upstart.is_upstart(job):
                self.upstart.enable(job)
            if self.sysvinit.has_service(job):
                self.sysvinit.enable(job)

    def disable(self, job: str) -> None:
        """Disable the upstart job and any init script of the same name."""
        with with_context(self._context(job, "disable")):
            if self.upstart.is_upstart(job):
                self.upstart.disable(job)
            if self.sysvinit.has_service(job):
                self.sysvinit.disable(job)

    def remove(self, job: str) -> None:
        """Remove the job from both engines.

        Both removals are attempted even if the first one fails.

        Raises:
            ServiceError: The single failure, when only one engine failed.
            CompositeServiceError: When both engines failed.
        """
        with with_context(self._context(job, "remove")):
            errors: list[ServiceError] = []
            if self.upstart.is_upstart(job):
                try:
                    self.upstart.remove(job)
                except ServiceError as e:
                    _logger.error("upstart_remove_failed", error=str(e))
                    errors.append(e)
            if self.sysvinit.has_service(job):
                try:
                    self.sysvinit.remove(job)
                except ServiceError as e:
                    _logger.error("sysvinit_remove_failed", error=str(e))
                    errors.append(e)
            if len(errors) == 1:
                raise errors[0]
            if errors:
                raise CompositeServiceError("remove", errors)

    # ─── Control ───────────────────────────────────────────────────

    def start(self, job: str) -> None:
        with self._engine(job, "start") as engine:
            engine.start(job)

    def stop(self, job: str) -> None:
        with self._engine(job, "stop") as engine:
            engine.stop(job)

    def restart(self, job: str) -> None:
        with self._engine(job, "restart") as engine:
            engine.restart(job)

    def reload(self, job: str) -> None:
        with self._engine(job, "reload") as engine:
            engine.reload(job)
