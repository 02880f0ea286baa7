"""Plan command implementation.

Shows which destination paths a cleanup would delete.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from sitesweep.cleaner.cleaner import Cleaner
from sitesweep.cleaner.models import CleanerError
from sitesweep.cli.display import create_plan_table, plan_to_dict
from sitesweep.cli.types import OutputFormat, build_site
from sitesweep.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show obsolete paths in the build destination.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_plan(
    ctx: typer.Context,
    outputs: Annotated[
        Path,
        typer.Option(
            "--outputs",
            "-o",
            help="Build output manifest, one destination path per line.",
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to sitesweep.toml.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the paths the next cleanup would delete, without deleting.

    Examples:
        sitesweep plan --outputs build-outputs.txt
        sitesweep plan --outputs build-outputs.txt --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    site = build_site(config, outputs)

    try:
        plan = Cleaner(site).plan()
    except CleanerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(plan_to_dict(plan)))
        return

    if plan.is_empty:
        print_success("Destination is clean. No obsolete paths found.")
        return

    console.print(create_plan_table(plan))
    console.print(f"\n[muted]Found {len(plan.obsolete)} obsolete path(s) in {plan.destination}[/]")
