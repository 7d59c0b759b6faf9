"""Core infrastructure: logging and configuration."""

from initswitch.core.config import ProviderConfig, SysvinitConfig, UpstartConfig
from initswitch.core.logging import ServiceContext, configure_logging, get_logger, with_context

__all__ = [
    "ProviderConfig",
    "ServiceContext",
    "SysvinitConfig",
    "UpstartConfig",
    "configure_logging",
    "get_logger",
    "with_context",
]
