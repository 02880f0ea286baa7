"""Resolution of request paths to files under a public root.

Request paths are normalized into segments that can never climb above
the public root, then matched against the files on disk: the exact
file, a directory index, or a ``.html`` sibling.
"""

import os
import re
from pathlib import Path

INDEX_FILE = "index.html"

_SEPARATORS = re.compile("|".join(re.escape(s) for s in (os.sep, os.altsep) if s))


def split_segments(path: str) -> list[str]:
    """Split a path into normalized segments.

    Empty and ``.`` segments are dropped; ``..`` removes the previous
    segment and is ignored when there is none left.

    Args:
        path: Request or relative path, with any leading separator.

    Returns:
        Segments confined to the root the path is relative to.
    """
    segments: list[str] = []
    for segment in _SEPARATORS.split(path):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if segments:
                segments.pop()
        else:
            segments.append(segment)
    return segments


def public_path_segments(path: str, public_root: str | Path) -> list[str]:
    """Resolve a request path to file segments under a public root.

    Tries, in order: the exact file, ``<path>/index.html``, and finally
    ``<last segment>.html``. The root request resolves to ``index.html``.

    Args:
        path: Request path, e.g. ``/blog/post``.
        public_root: Directory the site is served from.

    Returns:
        Segments of the resolved file relative to public_root.
    """
    segments = split_segments(path)
    root = Path(public_root)

    if not segments:
        return [INDEX_FILE]

    if (root.joinpath(*segments)).is_file():
        return segments

    if (root.joinpath(*segments, INDEX_FILE)).is_file():
        return [*segments, INDEX_FILE]

    return [*segments[:-1], f"{segments[-1]}.html"]


def resolve_public_file(path: str, public_root: str | Path) -> Path:
    """Resolve a request path to a file path under a public root."""
    return Path(public_root).joinpath(*public_path_segments(path, public_root))
