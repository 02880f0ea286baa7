"""Allow running sitesweep as ``python -m sitesweep``."""

from sitesweep.cli.main import app

app()
