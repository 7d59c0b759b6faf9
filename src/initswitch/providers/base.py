"""Interface shared by every service provider."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ServiceProvider(Protocol):
    """Protocol for an init system engine.

    Queries return booleans. Actions return None and raise a
    :class:`~initswitch.providers.exceptions.ServiceError` on failure.
    Actions are idempotent: starting a running job or stopping a stopped
    one succeeds without invoking anything.
    """

    def has_service(self, job: str) -> bool: ...

    def is_enabled(self, job: str) -> bool: ...

    def is_running(self, job: str) -> bool: ...

    def enable(self, job: str) -> None: ...

    def disable(self, job: str) -> None: ...

    def remove(self, job: str) -> None: ...

    def start(self, job: str) -> None: ...

    def stop(self, job: str) -> None: ...

    def restart(self, job: str) -> None: ...

    def reload(self, job: str) -> None: ...
