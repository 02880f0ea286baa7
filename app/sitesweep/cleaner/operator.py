"""Recursive deletion of obsolete destination paths.

Handles deletion of files, directories and symlinks with dry-run
support. Paths that are already gone count as deleted.
"""

import logging
import shutil
from pathlib import Path

from sitesweep.cleaner.models import DeletionResult

logger = logging.getLogger(__name__)


class DeletionOperator:
    """Deletes paths recursively, one result per path.

    Attributes:
        _dry_run: If True, simulate deletions without modifying the filesystem.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the DeletionOperator.

        Args:
            dry_run: If True, report what would be deleted without deleting.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Whether deletions are simulated."""
        return self._dry_run

    def delete(self, paths: list[str]) -> list[DeletionResult]:
        """Delete multiple paths and return results.

        Failures are isolated per path: a path that cannot be deleted
        does not stop the remaining deletions.

        Args:
            paths: Absolute paths to delete.

        Returns:
            List of DeletionResult, one per input path.
        """
        return [self._delete_single(path) for path in paths]

    def _delete_single(self, path: str) -> DeletionResult:
        """Delete a single path.

        - Directories: shutil.rmtree
        - Files, symlinks and dead symlinks: Path.unlink
        - Missing paths: success, flagged as missing

        Args:
            path: Absolute path to delete.

        Returns:
            DeletionResult indicating success or failure.
        """
        target = Path(path)

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return DeletionResult(path=path, success=True, dry_run=True)

        try:
            # Directories (but not symlinks to directories)
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(path)
            elif target.exists() or target.is_symlink():
                target.unlink()
            else:
                logger.debug("Already gone: %s", path)
                return DeletionResult(path=path, success=True, missing=True)
        except FileNotFoundError:
            # Removed by someone else between the check and the delete
            logger.debug("Already gone: %s", path)
            return DeletionResult(path=path, success=True, missing=True)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return DeletionResult(path=path, success=False, error=str(e))

        logger.info("Deleted %s", path)
        return DeletionResult(path=path, success=True)
