"""Service providers: upstart job engine, SysV init script engine, and their combination."""

from initswitch.providers.base import ServiceProvider
from initswitch.providers.commands import CommandResult, CommandRunner
from initswitch.providers.compat import CompatibilityProvider, ServiceStatus
from initswitch.providers.exceptions import (
    CommandError,
    CompositeServiceError,
    JobFileError,
    JobNotFoundError,
    ServiceError,
    VersionParseError,
)
from initswitch.providers.factory import create_provider
from initswitch.providers.locator import JobFileKind, JobLocator
from initswitch.providers.sysvinit import SysvinitProvider
from initswitch.providers.upstart import UpstartProvider
from initswitch.providers.version import VersionResolver, VersionTier

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "CompatibilityProvider",
    "CompositeServiceError",
    "JobFileError",
    "JobFileKind",
    "JobLocator",
    "JobNotFoundError",
    "ServiceError",
    "ServiceProvider",
    "ServiceStatus",
    "SysvinitProvider",
    "UpstartProvider",
    "VersionParseError",
    "VersionResolver",
    "VersionTier",
    "create_provider",
]
