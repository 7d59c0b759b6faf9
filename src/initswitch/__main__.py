"""Allow ``python -m initswitch``."""

from initswitch.cli import app

app()
