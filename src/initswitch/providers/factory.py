"""Factory for building the service provider from configuration."""

from __future__ import annotations

from initswitch.core.config import ProviderConfig
from initswitch.core.logging import get_logger
from initswitch.providers.commands import CommandRunner
from initswitch.providers.compat import CompatibilityProvider
from initswitch.providers.sysvinit import SysvinitProvider
from initswitch.providers.upstart import SESSION_ENV_VAR, UpstartProvider

_logger = get_logger("providers.factory")


def create_provider(
    config: ProviderConfig | None = None,
    runner: CommandRunner | None = None,
) -> CompatibilityProvider:
    """Create the upstart + sysvinit provider.

    Args:
        config: Provider configuration; defaults match a stock Debian layout.
        runner: Command runner shared by both engines. Defaults to a real
            runner that strips UPSTART_SESSION when configured to.
    """
    config = config or ProviderConfig()
    if runner is None:
        drop_env = (SESSION_ENV_VAR,) if config.upstart.drop_session_env else ()
        runner = CommandRunner(drop_env=drop_env)
    _logger.debug(
        "provider_created",
        job_paths=[str(p) for p in config.upstart.job_paths],
        script_paths=[str(p) for p in config.sysvinit.script_paths],
    )
    return CompatibilityProvider(
        UpstartProvider(config.upstart, runner),
        SysvinitProvider(config.sysvinit, runner),
    )


__all__ = ["create_provider"]
