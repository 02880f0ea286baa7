"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from sitesweep.config.loader import destination_path, get_config_path, require_config
from sitesweep.site import OutputManifestError, StaticSite, load_output_manifest
from sitesweep.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for cleanup plans."""

    TABLE = "table"
    JSON = "json"


def build_site(config_path: Path | None, outputs_path: Path) -> StaticSite:
    """Build a StaticSite from the config file and a build output manifest.

    Args:
        config_path: Optional custom config path.
        outputs_path: Build output manifest, one destination path per line.

    Returns:
        StaticSite ready for cleanup.

    Raises:
        typer.Exit: If the config or the output manifest cannot be loaded.
    """
    path = config_path or get_config_path()
    config = require_config(path)

    try:
        outputs = load_output_manifest(outputs_path)
    except OutputManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    return StaticSite(
        dest=str(destination_path(config, path)),
        keep_files=list(config.site.keep_files),
        outputs=outputs,
    )
