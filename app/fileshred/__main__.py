"""Allow running fileshred as ``python -m fileshred``."""

from fileshred.cli.main import app

app()
