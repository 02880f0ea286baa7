"""Shared Rich display functions for cleanup plans and results.

Provides reusable table builders and summary printers used by the
plan and clean commands.
"""

import os

from rich.markup import escape
from rich.table import Table

from sitesweep.cleaner.models import CleanupPlan, DeletionResult
from sitesweep.utils.formatting import console, print_info, print_success, print_warning


def _display_path(path: str, destination: str) -> str:
    return escape(os.path.relpath(path, destination))


def create_plan_table(plan: CleanupPlan, dry_run: bool = False) -> Table:
    """Create a Rich table listing the paths a cleanup will delete.

    Args:
        plan: Cleanup plan to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table with Path and Reason columns.
    """
    title = "Obsolete Paths (Dry Run)" if dry_run else "Obsolete Paths"

    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Reason", width=10)

    for path in plan.obsolete:
        reason = plan.reason_for(path)
        style = "changed" if reason == "replaced" else "removed"
        table.add_row(
            f"[{style}]{_display_path(path, plan.destination)}[/{style}]",
            f"[muted]{reason}[/muted]",
        )

    return table


def plan_to_dict(plan: CleanupPlan) -> dict[str, object]:
    """Convert a cleanup plan to a JSON-serializable dictionary."""
    return {
        "destination": plan.destination,
        "obsolete": [{"path": p, "reason": plan.reason_for(p)} for p in plan.obsolete],
        "counts": {
            "existing": len(plan.existing),
            "output_files": len(plan.output_files),
            "output_dirs": len(plan.output_dirs),
            "replaced": len(plan.replaced),
            "obsolete": len(plan.obsolete),
        },
    }


def print_deletion_results(results: list[DeletionResult], destination: str) -> None:
    """Display deletion results followed by a summary line.

    Args:
        results: Results returned by the deletion operator.
        destination: Destination root used to shorten displayed paths.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Status", width=10)
    table.add_column("Details", style="muted")

    for r in results:
        if r.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif r.missing:
            status = "[success]deleted[/]"
            detail = "Already gone"
        elif r.success:
            status = "[success]deleted[/]"
            detail = ""
        else:
            status = "[error]failed[/]"
            detail = escape(r.error or "Unknown error")
        table.add_row(_display_path(r.path, destination), status, detail)

    console.print(table)

    success_count = sum(1 for r in results if r.success and not r.dry_run)
    fail_count = sum(1 for r in results if not r.success)
    dry_count = sum(1 for r in results if r.dry_run)

    if dry_count:
        print_info(f"Dry-run: {dry_count} path(s) would be deleted.")
    elif fail_count:
        print_warning(f"{success_count} succeeded, {fail_count} failed")
    else:
        print_success(f"All {success_count} path(s) deleted.")
