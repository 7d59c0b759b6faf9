# initswitch/cli/commands: Command modules for the initswitch CLI.

from .control import is_running, reload, restart, start, stop
from .enablement import disable, enable, has_service, is_enabled, remove, status, tier

__all__ = [
    # control.py
    "is_running",
    "reload",
    "restart",
    "start",
    "stop",
    # enablement.py
    "disable",
    "enable",
    "has_service",
    "is_enabled",
    "remove",
    "status",
    "tier",
]
