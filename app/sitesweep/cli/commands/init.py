"""Init command implementation.

Creates a sitesweep.toml file with default settings.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from sitesweep.config.loader import ConfigError, config_exists, get_config_path, save_config
from sitesweep.config.models import SiteSection, SweepConfig
from sitesweep.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Initialize a sitesweep.toml configuration.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the config file.",
        ),
    ] = None,
    destination: Annotated[
        str,
        typer.Option(
            "--destination",
            "-d",
            help="Build output directory, relative to the config file.",
        ),
    ] = "output",
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing config without prompting.",
        ),
    ] = False,
) -> None:
    """Create a configuration file with default protected paths.

    Examples:
        sitesweep init                       # Create ./sitesweep.toml
        sitesweep init --destination _site   # Custom build directory
        sitesweep init --force               # Overwrite existing config
    """
    if ctx.invoked_subcommand is not None:
        return

    output_path = output or get_config_path()

    if config_exists(output_path):
        if not force:
            print_error(f"Config already exists: {output_path}")
            print_info("Use --force to overwrite or specify a different path with --output.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing config: {output_path}")

    try:
        config = SweepConfig(site=SiteSection(destination=destination))
    except ValueError as e:
        print_error(f"Invalid destination: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved_path = save_config(config, output_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved_path}")
    console.print(f"[muted]destination = {escape(config.site.destination)}[/]")
    console.print(f"[muted]keep_files = {escape(', '.join(config.site.keep_files))}[/]")
