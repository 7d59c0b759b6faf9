"""initswitch - enable, disable and control init jobs across upstart and sysvinit."""

__version__ = "0.4.0"

__all__ = ["__version__"]
