"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from sitesweep import __version__
from sitesweep.cli.commands import clean, init, plan, resolve

# Create main Typer app
app = typer.Typer(
    name="sitesweep",
    help="Clean static-site build destinations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sitesweep version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route sitesweep log records to stderr at the requested level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("sitesweep").setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """sitesweep - Clean static-site build destinations.

    Removes everything from a build's destination directory that the
    next build will not produce, keeping protected paths.
    """
    _configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(init.app, name="init")
app.add_typer(plan.app, name="plan")
app.add_typer(clean.app, name="clean")
app.command(name="resolve")(resolve.resolve_request)


if __name__ == "__main__":
    app()
