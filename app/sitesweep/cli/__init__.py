"""CLI package for sitesweep.

This package contains the Typer application and all subcommands.
"""

from sitesweep.cli.main import app

__all__ = ["app"]
