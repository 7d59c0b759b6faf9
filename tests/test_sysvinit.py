"""Tests for the SysV init script provider."""

from __future__ import annotations

from pathlib import Path

import pytest

from initswitch.providers.exceptions import CommandError, JobNotFoundError
from initswitch.providers.sysvinit import SysvinitProvider
from tests.helpers import RUNLEVEL, UPDATE_RC_D, FakeRunner


@pytest.fixture
def script(script_dir: Path) -> Path:
    path = script_dir / "apache2"
    path.write_text("#!/bin/sh\n")
    return path


def link(rc_root: Path, runlevel: str, name: str) -> None:
    rc_dir = rc_root / f"rc{runlevel}.d"
    rc_dir.mkdir(exist_ok=True)
    (rc_dir / name).write_text("")


class TestLookup:
    def test_has_service(self, script: Path, sysvinit: SysvinitProvider) -> None:
        assert sysvinit.has_service("apache2") is True
        assert sysvinit.has_service("nginx") is False
        assert sysvinit.script_path("apache2") == script

    def test_invalid_name(self, sysvinit: SysvinitProvider) -> None:
        with pytest.raises(ValueError):
            sysvinit.has_service("../rc.local")


class TestRunlevel:
    def test_reads_last_token(self, sysvinit: SysvinitProvider) -> None:
        assert sysvinit.current_runlevel() == "2"

    def test_unknown_output_uses_default(self, runner: FakeRunner,
                                         sysvinit: SysvinitProvider) -> None:
        runner.respond([RUNLEVEL], stdout="unknown\n")
        assert sysvinit.current_runlevel() == "2"

    def test_missing_binary_uses_default(self, runner: FakeRunner,
                                         sysvinit: SysvinitProvider) -> None:
        runner.respond_with([RUNLEVEL], CommandError([RUNLEVEL], None, "No such file"))
        assert sysvinit.current_runlevel() == "2"

    def test_reports_other_runlevels(self, runner: FakeRunner,
                                     sysvinit: SysvinitProvider) -> None:
        runner.respond([RUNLEVEL], stdout="2 3\n")
        assert sysvinit.current_runlevel() == "3"


class TestIsEnabled:
    def test_start_link_enables(self, script: Path, rc_root: Path,
                                sysvinit: SysvinitProvider) -> None:
        link(rc_root, "2", "S20apache2")
        assert sysvinit.is_enabled("apache2") is True

    def test_kill_link_does_not_enable(self, script: Path, rc_root: Path,
                                       sysvinit: SysvinitProvider) -> None:
        link(rc_root, "2", "K01apache2")
        assert sysvinit.is_enabled("apache2") is False

    def test_link_for_other_runlevel_ignored(self, script: Path, rc_root: Path,
                                             sysvinit: SysvinitProvider) -> None:
        link(rc_root, "3", "S20apache2")
        assert sysvinit.is_enabled("apache2") is False

    def test_prefix_of_other_service_ignored(self, script: Path, rc_root: Path,
                                             sysvinit: SysvinitProvider) -> None:
        link(rc_root, "2", "S20apache2-doc")
        assert sysvinit.is_enabled("apache2") is False

    def test_missing_script_raises(self, sysvinit: SysvinitProvider) -> None:
        with pytest.raises(JobNotFoundError):
            sysvinit.is_enabled("apache2")


class TestEnableDisable:
    def test_enable_runs_update_rc_d(self, script: Path, runner: FakeRunner,
                                     sysvinit: SysvinitProvider) -> None:
        sysvinit.enable("apache2")
        assert runner.verbs(UPDATE_RC_D) == [("apache2", "defaults"), ("apache2", "enable")]

    def test_disable_runs_update_rc_d(self, script: Path, runner: FakeRunner,
                                      sysvinit: SysvinitProvider) -> None:
        sysvinit.disable("apache2")
        assert runner.verbs(UPDATE_RC_D) == [("apache2", "defaults"), ("apache2", "disable")]

    def test_failure_raises(self, script: Path, runner: FakeRunner,
                            sysvinit: SysvinitProvider) -> None:
        runner.respond([UPDATE_RC_D, "apache2", "enable"], returncode=1)
        with pytest.raises(CommandError):
            sysvinit.enable("apache2")

    def test_missing_script_raises(self, runner: FakeRunner,
                                   sysvinit: SysvinitProvider) -> None:
        with pytest.raises(JobNotFoundError):
            sysvinit.disable("apache2")
        assert runner.calls == []


class TestControl:
    def test_start_when_stopped(self, script: Path, runner: FakeRunner,
                                sysvinit: SysvinitProvider) -> None:
        runner.respond([str(script), "status"], returncode=3)
        sysvinit.start("apache2")
        assert runner.verbs(str(script)) == [("status",), ("start",)]

    def test_start_when_running_is_noop(self, script: Path, runner: FakeRunner,
                                        sysvinit: SysvinitProvider) -> None:
        sysvinit.start("apache2")
        assert runner.verbs(str(script)) == [("status",)]

    def test_stop_when_running(self, script: Path, runner: FakeRunner,
                               sysvinit: SysvinitProvider) -> None:
        sysvinit.stop("apache2")
        assert runner.verbs(str(script)) == [("status",), ("stop",)]

    def test_reload_falls_back_to_restart(self, script: Path, runner: FakeRunner,
                                          sysvinit: SysvinitProvider) -> None:
        runner.respond([str(script), "reload"], returncode=3)
        sysvinit.reload("apache2")
        assert runner.verbs(str(script)) == [("status",), ("reload",), ("restart",)]


class TestRemove:
    def test_remove(self, script: Path, runner: FakeRunner,
                    sysvinit: SysvinitProvider) -> None:
        sysvinit.remove("apache2")

        assert ("stop",) in runner.verbs(str(script))
        assert runner.verbs(UPDATE_RC_D) == [("-f", "apache2", "remove")]
        assert not script.exists()

    def test_remove_unknown_is_noop(self, runner: FakeRunner,
                                    sysvinit: SysvinitProvider) -> None:
        sysvinit.remove("apache2")
        assert runner.calls == []
