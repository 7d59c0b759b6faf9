"""Tests for initswitch.providers.locator."""

from __future__ import annotations

from pathlib import Path

import pytest

from initswitch.providers.exceptions import JobNotFoundError
from initswitch.providers.locator import JobFileKind, JobLocator, validate_job_name


class TestJobLocator:
    def test_finds_primary_file(self, job_dir: Path) -> None:
        (job_dir / "ssh.conf").write_text("start on filesystem\n")
        locator = JobLocator([job_dir])

        assert locator.locate("ssh") == job_dir / "ssh.conf"
        assert locator.find("ssh", JobFileKind.PRIMARY) == job_dir / "ssh.conf"

    def test_finds_override_file(self, job_dir: Path) -> None:
        (job_dir / "ssh.override").write_text("manual\n")
        locator = JobLocator([job_dir])

        assert locator.locate("ssh", JobFileKind.OVERRIDE) == job_dir / "ssh.override"
        assert locator.find("ssh") is None

    def test_first_search_path_wins(self, tmp_path: Path) -> None:
        first, second = tmp_path / "a", tmp_path / "b"
        first.mkdir()
        second.mkdir()
        (first / "cron.conf").write_text("a\n")
        (second / "cron.conf").write_text("b\n")

        assert JobLocator([second, first]).locate("cron") == second / "cron.conf"
        assert JobLocator([first, second]).locate("cron") == first / "cron.conf"

    def test_later_path_used_when_earlier_lacks_file(self, tmp_path: Path) -> None:
        first, second = tmp_path / "a", tmp_path / "b"
        first.mkdir()
        second.mkdir()
        (second / "cron.conf").write_text("b\n")

        assert JobLocator([first, second]).locate("cron") == second / "cron.conf"

    def test_directories_are_not_job_files(self, job_dir: Path) -> None:
        (job_dir / "ssh.conf").mkdir()
        assert JobLocator([job_dir]).find("ssh") is None

    def test_missing_raises_not_found(self, job_dir: Path) -> None:
        with pytest.raises(JobNotFoundError) as exc_info:
            JobLocator([job_dir]).locate("nope", JobFileKind.OVERRIDE)
        assert exc_info.value.job == "nope"
        assert exc_info.value.filename == "nope.override"

    def test_missing_search_path_is_skipped(self, tmp_path: Path, job_dir: Path) -> None:
        (job_dir / "ssh.conf").write_text("")
        locator = JobLocator([tmp_path / "does-not-exist", job_dir])
        assert locator.locate("ssh") == job_dir / "ssh.conf"


class TestValidateJobName:
    @pytest.mark.parametrize("name", ["", ".", "..", "../etc/passwd", "a/b", "nul\0"])
    def test_rejects_invalid_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            validate_job_name(name)

    def test_accepts_plain_names(self) -> None:
        assert validate_job_name("mysql") == "mysql"
        assert validate_job_name("network-interface-security") == "network-interface-security"
