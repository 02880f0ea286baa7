"""Protected destination paths that cleanup must never delete.

Protected paths are configured as fragments relative to the destination
root (``keep_files``). A fragment protects the path it names and every
path nested below it, plus the chain of directories leading to it.
"""

import os
import re
from collections.abc import Iterable, Sequence

# Version control and search index directories kept by default
DEFAULT_KEEP_FILES: list[str] = [".git", ".svn", "_pagefind"]


def keep_file_regex(dest: str, keep_files: Sequence[str]) -> re.Pattern[str] | None:
    """Build a regex matching protected paths under a destination.

    Fragments are matched literally and on path-segment boundaries, so
    ``.git`` matches ``<dest>/.git`` and ``<dest>/.git/HEAD`` but not
    ``<dest>/.github``.

    Args:
        dest: Normalized destination root.
        keep_files: Fragments relative to the destination root.

    Returns:
        Compiled pattern, or None when no fragments are configured.
    """
    fragments = [_normalize_fragment(f) for f in keep_files]
    fragments = [f for f in fragments if f]
    if not fragments:
        return None

    prefix = re.escape(dest.rstrip("/"))
    union = "|".join(re.escape(f) for f in fragments)
    return re.compile(rf"\A{prefix}/(?:{union})(?:/|\Z)")


def parent_dirs(paths: Iterable[str], root: str) -> set[str]:
    """Collect the ancestor directories of paths, strictly below root.

    The walk up from each path stops at the root or at a directory
    already collected. Paths not under the root contribute nothing.

    Args:
        paths: Normalized absolute paths.
        root: Normalized destination root.

    Returns:
        Set of ancestor directories, excluding the root itself.
    """
    prefix = root.rstrip("/") + "/"
    dirs: set[str] = set()
    for path in paths:
        if not path.startswith(prefix):
            continue
        parent = os.path.dirname(path)
        # Ancestors of a collected directory are collected too
        while parent != root and parent not in dirs:
            dirs.add(parent)
            parent = os.path.dirname(parent)
    return dirs


def _normalize_fragment(fragment: str) -> str:
    stripped = fragment.strip("/")
    normalized = os.path.normpath(stripped) if stripped else ""
    return "" if normalized == "." else normalized
