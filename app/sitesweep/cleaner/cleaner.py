"""Destination cleanup before a site build.

Computes which paths under a site's destination the upcoming build
will not produce and deletes them. Paths the build writes, their parent
directories and protected (``keep_files``) paths always survive; files
standing where the build needs a directory are removed.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from sitesweep.cleaner.hooks import HookRegistry
from sitesweep.cleaner.models import (
    CleanerError,
    CleanupPlan,
    DeletionResult,
    ResolutionError,
    resolve_destination,
)
from sitesweep.cleaner.operator import DeletionOperator
from sitesweep.cleaner.protected import keep_file_regex, parent_dirs

if TYPE_CHECKING:
    from sitesweep.site import Site

logger = logging.getLogger(__name__)

# Self and parent directory entries
HIDDEN_FILE_REGEX = re.compile(r"/\.{1,2}$")

HOOK_OWNER = "clean"
HOOK_EVENT = "on_obsolete"


class DeletionError(CleanerError):
    """Raised when one or more obsolete paths could not be deleted.

    Attributes:
        failures: Results of the failed deletions.
    """

    def __init__(self, failures: list[DeletionResult]) -> None:
        self.failures = failures
        paths = ", ".join(f.path for f in failures)
        super().__init__(f"Failed to delete {len(failures)} path(s): {paths}")


class Cleaner:
    """Cleans up a site's destination directory before it is built.

    Args:
        site: Site exposing the destination, keep_files, a listing
            capability and the build's output items.
        hooks: Registry notified with the obsolete paths before deletion.
        operator: Deletion capability. Defaults to a real DeletionOperator.
    """

    def __init__(
        self,
        site: Site,
        *,
        hooks: HookRegistry | None = None,
        operator: DeletionOperator | None = None,
    ) -> None:
        self.site = site
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.operator = operator if operator is not None else DeletionOperator()

    def cleanup(self) -> None:
        """Delete every obsolete path under the destination.

        Every obsolete path is attempted even if some fail.

        Raises:
            ListingError: If the destination cannot be listed.
            ResolutionError: If an output item cannot be resolved.
            DeletionError: If any obsolete path could not be deleted.
        """
        results = self.apply(self.plan())
        failures = [r for r in results if not r.success]
        if failures:
            raise DeletionError(failures)

    def obsolete_files(self) -> list[str]:
        """The files and directories to be deleted during cleanup."""
        return list(self.plan().obsolete)

    def plan(self) -> CleanupPlan:
        """Compute the cleanup without deleting anything.

        Returns:
            CleanupPlan holding every intermediate set and the obsolete paths.
        """
        dest = _normalize(self.site.dest)
        is_protected = self._protection(dest)
        existing = self._existing_files(is_protected)
        new_files = self._new_files(dest)
        new_dirs = parent_dirs(new_files, dest)
        replaced = {d for d in new_dirs if os.path.isfile(d) and not is_protected(d)}

        obsolete = (existing - new_files - new_dirs) | replaced
        logger.debug(
            "Cleanup plan for %s: %d existing, %d new files, %d new dirs, %d obsolete",
            dest,
            len(existing),
            len(new_files),
            len(new_dirs),
            len(obsolete),
        )

        return CleanupPlan(
            destination=dest,
            existing=frozenset(existing),
            output_files=frozenset(new_files),
            output_dirs=frozenset(new_dirs),
            replaced=frozenset(replaced),
            obsolete=tuple(sorted(obsolete)),
        )

    def apply(self, plan: CleanupPlan) -> list[DeletionResult]:
        """Notify hooks of the obsolete paths, then delete them.

        Args:
            plan: Plan produced by :meth:`plan`.

        Returns:
            One DeletionResult per obsolete path.
        """
        obsolete = list(plan.obsolete)
        self.hooks.trigger(HOOK_OWNER, HOOK_EVENT, obsolete)

        if not obsolete:
            logger.debug("Nothing to clean in %s", plan.destination)
            return []

        return self.operator.delete(obsolete)

    def _protection(self, dest: str) -> Callable[[str], bool]:
        """Build the predicate telling whether a path must survive cleanup."""
        regex = keep_file_regex(dest, self.site.keep_files)
        keep_paths = [_normalize(self.site.in_dest_dir(f)) for f in self.site.keep_files]
        dirs = parent_dirs(keep_paths, dest)

        def is_protected(path: str) -> bool:
            return (regex is not None and regex.search(path) is not None) or path in dirs

        return is_protected

    def _existing_files(self, is_protected: Callable[[str], bool]) -> set[str]:
        """Existing paths, apart from protected and self/parent entries."""
        files: set[str] = set()
        for path in self.site.list_dest(include_hidden=True):
            if HIDDEN_FILE_REGEX.search(path):
                continue
            path = _normalize(path)
            if is_protected(path):
                logger.debug("Keeping protected path: %s", path)
                continue
            files.add(path)

        return files

    def _new_files(self, dest: str) -> set[str]:
        """Paths the build will write."""
        prefix = dest.rstrip("/") + "/"
        files: set[str] = set()
        for item in self.site.each_output_item():
            path = _normalize(resolve_destination(item, dest))
            if not path.startswith(prefix):
                msg = f"Output path {path} is outside the destination {dest}"
                raise ResolutionError(msg)
            files.add(path)
        return files


def _normalize(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))
