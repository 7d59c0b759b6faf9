"""Upstart version detection and behavioural tiers.

Upstart changed the job file semantics twice:

- before 0.6.7 there is no ``manual`` stanza, a job is disabled by
  commenting out its ``start on`` stanza;
- from 0.6.7 the ``manual`` stanza exists and the last of ``start on`` /
  ``manual`` in the job file wins;
- from 0.9.0 ``<job>.override`` files are read after ``<job>.conf``, so
  the job file itself never needs to be touched.
"""

from __future__ import annotations

import re
from enum import Enum

from initswitch.core.logging import get_logger
from initswitch.providers.commands import CommandRunner
from initswitch.providers.exceptions import VersionParseError

_logger = get_logger("version")

Version = tuple[int, ...]

MANUAL_STANZA_SINCE: Version = (0, 6, 7)
OVERRIDE_FILES_SINCE: Version = (0, 9, 0)

# "initctl (upstart 1.12.1)"
_VERSION_OUTPUT_RE = re.compile(r"\(\s*(?P<name>[^\s()]+)\s+(?P<version>[^\s()]+)[^)]*\)")
_NUMERIC_RE = re.compile(r"^\d+(?:\.\d+)*")


class VersionTier(str, Enum):
    """Behavioural era of the upstart job file format."""

    PRE_A = "pre_a"  # < 0.6.7: no manual stanza, no override files
    PRE_B = "pre_b"  # < 0.9.0: manual stanza, no override files
    POST_B = "post_b"  # >= 0.9.0: manual stanza and override files

    @property
    def has_manual_stanza(self) -> bool:
        return self is not VersionTier.PRE_A

    @property
    def has_override_files(self) -> bool:
        return self is VersionTier.POST_B


def parse_version(text: str) -> Version:
    """Parse the leading numeric part of a version string.

    ``"0.6.5-7ubuntu1"`` parses as ``(0, 6, 5)``.

    Raises:
        VersionParseError: If ``text`` doesn't start with a number.
    """
    match = _NUMERIC_RE.match(text.strip())
    if match is None:
        raise VersionParseError(text)
    return tuple(int(part) for part in match.group(0).split("."))


def _pad(version: Version, width: int = 3) -> Version:
    return version + (0,) * (width - len(version))


def tier_for(version: Version | str) -> VersionTier:
    """Classify a version. Lower bounds are inclusive."""
    if isinstance(version, str):
        version = parse_version(version)
    width = max(len(version), 3)
    version = _pad(version, width)
    if version < _pad(MANUAL_STANZA_SINCE, width):
        return VersionTier.PRE_A
    if version < _pad(OVERRIDE_FILES_SINCE, width):
        return VersionTier.PRE_B
    return VersionTier.POST_B


class VersionResolver:
    """Queries the upstart version once per instance and caches it.

    The cache is never invalidated: upstart cannot be upgraded underneath a
    running process without a reboot of the init system.
    """

    def __init__(self, runner: CommandRunner, initctl: str = "/sbin/initctl") -> None:
        self._runner = runner
        self._initctl = initctl
        self._version: str | None = None

    def resolve_version(self) -> str:
        """Return the upstart version string, e.g. ``"1.12.1"``.

        Raises:
            CommandError: If ``initctl --version`` fails.
            VersionParseError: If its output has no ``(upstart <version>)`` token.
        """
        if self._version is None:
            result = self._runner.run([self._initctl, "--version"]).check()
            match = _VERSION_OUTPUT_RE.search(result.stdout)
            if match is None:
                raise VersionParseError(result.stdout)
            version = match.group("version")
            parse_version(version)
            self._version = version
            _logger.debug("upstart_version_resolved", version=version)
        return self._version

    def tier(self) -> VersionTier:
        return tier_for(self.resolve_version())
