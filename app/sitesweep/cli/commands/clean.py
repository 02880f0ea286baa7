"""Clean command implementation.

Deletes obsolete paths from the build destination.
"""

from pathlib import Path
from typing import Annotated

import typer

from sitesweep.cleaner.cleaner import Cleaner
from sitesweep.cleaner.models import CleanerError
from sitesweep.cleaner.operator import DeletionOperator
from sitesweep.cli.display import create_plan_table, print_deletion_results
from sitesweep.cli.types import build_site
from sitesweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Delete obsolete paths from the build destination.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_destination(
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
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete everything in the destination the next build will not write.

    Protected paths (keep_files) and the directories leading to build
    outputs are kept.

    Examples:
        sitesweep clean --outputs build-outputs.txt --dry-run
        sitesweep clean --outputs build-outputs.txt --yes
    """
    if ctx.invoked_subcommand is not None:
        return

    site = build_site(config, outputs)
    cleaner = Cleaner(site, operator=DeletionOperator(dry_run=dry_run))

    try:
        plan = cleaner.plan()
    except CleanerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if plan.is_empty:
        print_success("Destination is clean. Nothing to delete.")
        return

    console.print(create_plan_table(plan, dry_run=dry_run))

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {len(plan.obsolete)} path(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    results = cleaner.apply(plan)
    print_deletion_results(results, plan.destination)

    # Exit with error if any deletion failed
    if any(not r.success for r in results):
        raise typer.Exit(code=1)
