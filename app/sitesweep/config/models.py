"""Configuration models for sitesweep.toml.

This module defines the Pydantic models representing the
configuration file: the site destination with its protected paths and
the public root used for request path resolution.
"""

from pathlib import PurePosixPath
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitesweep.cleaner.protected import DEFAULT_KEEP_FILES


class SiteSection(BaseModel):
    """Site section of the configuration.

    Attributes:
        destination: Build output directory, relative to the config file.
        keep_files: Paths relative to destination that cleanup never deletes.
    """

    model_config = ConfigDict(extra="forbid")

    destination: Annotated[str, Field(min_length=1, description="Build output directory")] = (
        "output"
    )
    keep_files: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_KEEP_FILES),
            description="Protected paths relative to destination",
        ),
    ]

    @field_validator("keep_files")
    @classmethod
    def validate_keep_files(cls, v: list[str]) -> list[str]:
        """Validate that protected paths stay inside the destination."""
        for fragment in v:
            path = PurePosixPath(fragment)
            if not fragment.strip() or fragment.strip() == ".":
                msg = "keep_files entries cannot be empty"
                raise ValueError(msg)
            if path.is_absolute():
                msg = f"keep_files entries must be relative: {fragment}"
                raise ValueError(msg)
            if ".." in path.parts:
                msg = f"keep_files entries cannot contain '..': {fragment}"
                raise ValueError(msg)
        return v


class ServeSection(BaseModel):
    """Serve section of the configuration.

    Attributes:
        public_root: Directory requests resolve against. Defaults to
            the site destination when unset.
    """

    model_config = ConfigDict(extra="forbid")

    public_root: Annotated[str | None, Field(description="Directory served to requests")] = None


class SweepConfig(BaseModel):
    """Root configuration model.

    Attributes:
        site: Destination and protected paths.
        serve: Request path resolution settings.
    """

    model_config = ConfigDict(extra="forbid")

    site: Annotated[SiteSection, Field(default_factory=SiteSection)]
    serve: Annotated[ServeSection, Field(default_factory=ServeSection)]
