"""CLI commands for sitesweep.

This package contains all subcommand implementations.
"""

from sitesweep.cli.commands import clean, init, plan, resolve

__all__ = ["clean", "init", "plan", "resolve"]
