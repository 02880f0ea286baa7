"""Cleaner domain models.

This module defines the output-item variants a build hands to the
cleaner, the immutable cleanup plan, per-path deletion results, and
the exception hierarchy shared by the cleaner package.
"""

from collections.abc import Callable
from dataclasses import dataclass


class CleanerError(Exception):
    """Base exception for cleanup errors."""


class ResolutionError(CleanerError):
    """Raised when an output item cannot be resolved to a destination path."""


@dataclass(frozen=True, slots=True)
class DirectDestination:
    """Output item whose destination path is already known.

    Attributes:
        path: Absolute destination path of the generated file.
    """

    path: str


@dataclass(frozen=True, slots=True)
class ComputedDestination:
    """Output item whose destination depends on the destination root.

    Attributes:
        compute: Callable receiving the destination root and returning
            the absolute destination path.
    """

    compute: Callable[[str], str]


OutputItem = DirectDestination | ComputedDestination


def resolve_destination(item: object, root: str) -> str:
    """Resolve an output item to its destination path.

    Args:
        item: A DirectDestination or ComputedDestination.
        root: Destination root passed to computed destinations.

    Returns:
        The destination path reported by the item.

    Raises:
        ResolutionError: If the item is neither supported variant.
    """
    if isinstance(item, DirectDestination):
        return item.path
    if isinstance(item, ComputedDestination):
        return item.compute(root)

    msg = f"Output item has no resolvable destination: {item!r}"
    raise ResolutionError(msg)


@dataclass(frozen=True, slots=True)
class CleanupPlan:
    """Result of the set algebra for a single cleanup pass.

    Attributes:
        destination: Normalized destination root.
        existing: Paths found on disk, minus protected entries.
        output_files: Paths the build will write.
        output_dirs: Ancestor directories of output_files below the root.
        replaced: Output directories currently present as regular files.
        obsolete: Sorted paths to delete.
    """

    destination: str
    existing: frozenset[str]
    output_files: frozenset[str]
    output_dirs: frozenset[str]
    replaced: frozenset[str]
    obsolete: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        """Check whether there is nothing to delete."""
        return not self.obsolete

    def reason_for(self, path: str) -> str:
        """Describe why a path is scheduled for deletion."""
        return "replaced" if path in self.replaced else "obsolete"


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single deletion.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the path is gone afterwards.
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
        missing: Whether the path was already absent.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    missing: bool = False
