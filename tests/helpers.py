"""Shared test helpers for initswitch tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from initswitch.providers.commands import CommandResult, CommandRunner

INITCTL = "/sbin/initctl"
UPDATE_RC_D = "/usr/sbin/update-rc.d"
RUNLEVEL = "/sbin/runlevel"

Response = CommandResult | Exception | Callable[[tuple[str, ...]], CommandResult]


class FakeRunner(CommandRunner):
    """CommandRunner returning scripted results and recording every call.

    Unscripted commands succeed with empty output.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, ...]] = []
        self._responses: dict[tuple[str, ...], Response] = {}

    def respond(
        self,
        argv: Sequence[str],
        *,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        key = tuple(argv)
        self._responses[key] = CommandResult(key, returncode, stdout, stderr)

    def respond_with(self, argv: Sequence[str], response: Response) -> None:
        self._responses[tuple(argv)] = response

    def run(self, argv: Sequence[str]) -> CommandResult:
        key = tuple(argv)
        self.calls.append(key)
        response = self._responses.get(key)
        if response is None:
            return CommandResult(key, 0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, CommandResult):
            return response
        return response(key)

    def verbs(self, binary: str) -> list[tuple[str, ...]]:
        """Arguments of every call made to ``binary``."""
        return [call[1:] for call in self.calls if call[0] == binary]


def upstart_version_output(version: str) -> str:
    return f"initctl (upstart {version})\nCopyright (C) 2006-2014 Canonical Ltd.\n"
