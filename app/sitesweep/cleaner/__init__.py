"""Destination cleanup module.

This module computes obsolete paths in a site's destination directory
and deletes them, honoring protected paths and the directories the
upcoming build will create.
"""

from sitesweep.cleaner.cleaner import Cleaner, DeletionError
from sitesweep.cleaner.hooks import HookRegistry
from sitesweep.cleaner.listing import FilesystemLister, ListingError
from sitesweep.cleaner.models import (
    CleanerError,
    CleanupPlan,
    ComputedDestination,
    DeletionResult,
    DirectDestination,
    OutputItem,
    ResolutionError,
)
from sitesweep.cleaner.operator import DeletionOperator
from sitesweep.cleaner.protected import DEFAULT_KEEP_FILES

__all__ = [
    "DEFAULT_KEEP_FILES",
    "Cleaner",
    "CleanerError",
    "CleanupPlan",
    "ComputedDestination",
    "DeletionError",
    "DeletionOperator",
    "DeletionResult",
    "DirectDestination",
    "FilesystemLister",
    "HookRegistry",
    "ListingError",
    "OutputItem",
    "ResolutionError",
]
