"""Pytest fixtures for initswitch tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from initswitch.core.config import SysvinitConfig, UpstartConfig
from initswitch.providers.compat import CompatibilityProvider
from initswitch.providers.sysvinit import SysvinitProvider
from initswitch.providers.upstart import UpstartProvider
from tests.helpers import INITCTL, RUNLEVEL, UPDATE_RC_D, FakeRunner, upstart_version_output


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset structlog, root handlers and CLI globals around each test."""
    import initswitch.cli.helpers as cli_helpers

    cli_helpers.reset_state()
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    cli_helpers.reset_state()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)


@pytest.fixture
def job_dir(tmp_path: Path) -> Path:
    """Upstart job directory (stands in for /etc/init)."""
    path = tmp_path / "init"
    path.mkdir()
    return path


@pytest.fixture
def script_dir(tmp_path: Path) -> Path:
    """Init script directory (stands in for /etc/init.d)."""
    path = tmp_path / "init.d"
    path.mkdir()
    return path


@pytest.fixture
def rc_root(tmp_path: Path) -> Path:
    """Root of the rc<N>.d link farms (stands in for /etc)."""
    path = tmp_path / "etc"
    path.mkdir()
    return path


@pytest.fixture
def runner() -> FakeRunner:
    fake = FakeRunner()
    fake.respond([INITCTL, "--version"], stdout=upstart_version_output("1.12.1"))
    fake.respond([RUNLEVEL], stdout="N 2\n")
    return fake


@pytest.fixture
def upstart_config(job_dir: Path) -> UpstartConfig:
    return UpstartConfig(job_paths=[job_dir], initctl=INITCTL)


@pytest.fixture
def sysvinit_config(script_dir: Path, rc_root: Path) -> SysvinitConfig:
    return SysvinitConfig(
        script_paths=[script_dir],
        rc_root=rc_root,
        update_rc_d=UPDATE_RC_D,
        runlevel_command=RUNLEVEL,
    )


@pytest.fixture
def upstart(upstart_config: UpstartConfig, runner: FakeRunner) -> UpstartProvider:
    return UpstartProvider(upstart_config, runner)


@pytest.fixture
def sysvinit(sysvinit_config: SysvinitConfig, runner: FakeRunner) -> SysvinitProvider:
    return SysvinitProvider(sysvinit_config, runner)


@pytest.fixture
def provider(upstart: UpstartProvider, sysvinit: SysvinitProvider) -> CompatibilityProvider:
    return CompatibilityProvider(upstart, sysvinit)
