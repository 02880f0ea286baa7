"""Sites handed to the cleaner.

Defines the ``Site`` protocol the cleaner works against and
``StaticSite``, a concrete site whose build outputs come from a
build output manifest (one destination path per line).
"""

import functools
import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from sitesweep.cleaner.listing import FilesystemLister
from sitesweep.cleaner.models import (
    CleanerError,
    ComputedDestination,
    DirectDestination,
    OutputItem,
)
from sitesweep.cleaner.protected import DEFAULT_KEEP_FILES
from sitesweep.serving.public_paths import split_segments

logger = logging.getLogger(__name__)


class OutputManifestError(CleanerError):
    """Raised when a build output manifest cannot be read."""


class Site(Protocol):
    """What the cleaner needs to know about a site."""

    @property
    def dest(self) -> str: ...

    @property
    def keep_files(self) -> Sequence[str]: ...

    def in_dest_dir(self, *paths: str) -> str: ...

    def list_dest(self, include_hidden: bool = True) -> list[str]: ...

    def each_output_item(self) -> Iterable[OutputItem]: ...


@dataclass
class StaticSite:
    """Site with a fixed list of output items.

    Attributes:
        dest: Destination root the build writes into.
        keep_files: Protected fragments relative to dest.
        outputs: Output items of the upcoming build.
        lister: Listing capability for the destination.
    """

    dest: str
    keep_files: list[str] = field(default_factory=lambda: list(DEFAULT_KEEP_FILES))
    outputs: list[OutputItem] = field(default_factory=list)
    lister: FilesystemLister = field(default_factory=FilesystemLister)

    def __post_init__(self) -> None:
        self.dest = os.path.normpath(os.path.abspath(self.dest))

    def in_dest_dir(self, *paths: str) -> str:
        """Join paths onto the destination without leaving it."""
        return os.path.join(self.dest, *split_segments("/".join(paths)))

    def list_dest(self, include_hidden: bool = True) -> list[str]:
        """List every path under the destination."""
        return self.lister.glob(self.dest, include_hidden=include_hidden)

    def each_output_item(self) -> Iterator[OutputItem]:
        """Iterate over the build's output items."""
        yield from self.outputs


def _join_under(relative: str, root: str) -> str:
    return os.path.join(root, *split_segments(relative))


def parse_output_manifest(lines: Iterable[str]) -> list[OutputItem]:
    """Parse build output manifest lines into output items.

    Blank lines and ``#`` comments are skipped. Absolute paths become
    DirectDestination items; relative paths are resolved against the
    destination root at cleanup time.

    Args:
        lines: Manifest lines.

    Returns:
        Output items in manifest order.
    """
    items: list[OutputItem] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if os.path.isabs(line):
            items.append(DirectDestination(os.path.normpath(line)))
        else:
            items.append(ComputedDestination(functools.partial(_join_under, line)))
    return items


def load_output_manifest(path: Path) -> list[OutputItem]:
    """Load output items from a build output manifest file.

    Args:
        path: Manifest file path.

    Returns:
        Output items listed in the file.

    Raises:
        OutputManifestError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read build output manifest {path}: {e}"
        raise OutputManifestError(msg) from e

    items = parse_output_manifest(text.splitlines())
    logger.debug("Loaded %d output item(s) from %s", len(items), path)
    return items
