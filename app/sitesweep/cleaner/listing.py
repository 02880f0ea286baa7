"""Recursive listing of a destination directory.

Provides the default listing capability used by sites: every file and
directory below a root, depth-first, as absolute paths.
"""

import logging
import os

from sitesweep.cleaner.models import CleanerError

logger = logging.getLogger(__name__)


class ListingError(CleanerError):
    """Raised when a directory below the destination cannot be listed."""


class FilesystemLister:
    """Lists files and directories below a root directory.

    Symbolic links are reported but never followed, so a link to a
    directory outside the destination cannot pull foreign paths into
    the listing.
    """

    def glob(self, root: str, include_hidden: bool = True) -> list[str]:
        """List every path below a root.

        Args:
            root: Directory to list.
            include_hidden: If True, include entries whose name starts with a dot.

        Returns:
            Absolute paths in depth-first order. Empty if root is not a directory.

        Raises:
            ListingError: If any directory below root cannot be read.
        """
        root = os.path.abspath(root)
        if not os.path.isdir(root):
            logger.debug("Destination does not exist, nothing to list: %s", root)
            return []

        paths: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_listing_error):
            if not include_hidden:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
                filenames = [f for f in filenames if not f.startswith(".")]
            dirnames.sort()
            for name in dirnames:
                paths.append(os.path.join(dirpath, name))
            for name in sorted(filenames):
                paths.append(os.path.join(dirpath, name))

        return paths


def _raise_listing_error(error: OSError) -> None:
    msg = f"Cannot list {error.filename}: {error.strerror or error}"
    raise ListingError(msg) from error
