"""Static file serving helpers."""

from sitesweep.serving.public_paths import (
    INDEX_FILE,
    public_path_segments,
    resolve_public_file,
    split_segments,
)

__all__ = ["INDEX_FILE", "public_path_segments", "resolve_public_file", "split_segments"]
