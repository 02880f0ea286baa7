"""Unit tests for Cleaner.

Tests the obsolete path computation, protected paths, files replaced
by directories, hook notification and error propagation.
"""

import os
from collections.abc import Callable, Iterable
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sitesweep.cleaner.cleaner import HOOK_EVENT, HOOK_OWNER, Cleaner, DeletionError
from sitesweep.cleaner.hooks import HookRegistry
from sitesweep.cleaner.listing import ListingError
from sitesweep.cleaner.models import (
    ComputedDestination,
    DeletionResult,
    DirectDestination,
    ResolutionError,
)
from sitesweep.site import StaticSite, parse_output_manifest

MakeTree = Callable[[Path, list[str]], None]
ListTree = Callable[[Path], set[str]]


def _site(dest: Path, outputs: list[str], keep_files: list[str] | None = None) -> StaticSite:
    """Create a StaticSite with outputs given relative to dest."""
    return StaticSite(
        dest=str(dest),
        keep_files=keep_files if keep_files is not None else [".git"],
        outputs=parse_output_manifest(outputs),
    )


def _rel(paths: Iterable[str], dest: Path) -> set[str]:
    return {os.path.relpath(p, dest) for p in paths}


class TestCleanerPlan:
    """Tests for Cleaner.plan()."""

    def test_obsolete_files_and_orphaned_directory(self, dest: Path, make_tree: MakeTree) -> None:
        """Files not in the build and directories left empty are obsolete."""
        make_tree(dest, ["index.html", "old.html", "img/logo.png", ".git/HEAD"])
        site = _site(dest, ["index.html", "about/index.html"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {"old.html", "img", "img/logo.png"}

    def test_output_files_and_parent_dirs_are_kept(self, dest: Path, make_tree: MakeTree) -> None:
        """Paths the build writes and their ancestors are never obsolete."""
        make_tree(dest, ["blog/2024/post/index.html", "blog/2024/stale.html"])
        site = _site(dest, ["blog/2024/post/index.html"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {"blog/2024/stale.html"}
        assert _rel(plan.output_dirs, dest) == {"blog", "blog/2024", "blog/2024/post"}

    def test_output_dirs_exclude_destination(self, dest: Path) -> None:
        """The destination root is never an output directory."""
        site = _site(dest, ["index.html", "a/b/c.html", "a/b/d.html", "a/e.html"])

        plan = Cleaner(site).plan()

        assert str(dest) not in plan.output_dirs
        assert _rel(plan.output_dirs, dest) == {"a", "a/b"}

    def test_file_replaced_by_directory(self, dest: Path, make_tree: MakeTree) -> None:
        """A file where the build needs a directory is deleted."""
        make_tree(dest, ["a"])
        site = _site(dest, ["a/b.html"])

        plan = Cleaner(site).plan()

        assert _rel(plan.replaced, dest) == {"a"}
        assert _rel(plan.obsolete, dest) == {"a"}
        assert plan.reason_for(str(dest / "a")) == "replaced"

    def test_protected_file_in_place_of_output_dir_is_kept(
        self, dest: Path, make_tree: MakeTree
    ) -> None:
        """A protected file is not replaced even where the build needs a directory."""
        make_tree(dest, ["CNAME", "old.html"])
        site = _site(dest, ["CNAME/x.html"], keep_files=["CNAME"])

        plan = Cleaner(site).plan()

        assert plan.replaced == frozenset()
        assert _rel(plan.obsolete, dest) == {"old.html"}

    def test_protected_dir_chain_in_place_of_output_dir_is_kept(
        self, dest: Path, make_tree: MakeTree
    ) -> None:
        """A file leading to a protected path is not replaced either."""
        make_tree(dest, ["assets"])
        site = _site(dest, ["assets/app.css"], keep_files=["assets/keep/me.txt"])

        plan = Cleaner(site).plan()

        assert plan.obsolete == ()

    def test_directory_becoming_file_keeps_directory(self, dest: Path, make_tree: MakeTree) -> None:
        """A directory at an output file path is kept, its contents are not."""
        make_tree(dest, ["page/index.html"])
        site = _site(dest, ["page"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {"page/index.html"}

    def test_protected_paths_never_obsolete(self, dest: Path, make_tree: MakeTree) -> None:
        """Protected paths and their contents are excluded from the listing."""
        make_tree(dest, [".git/HEAD", ".git/objects/ab/cdef", ".svn/entries"])
        site = _site(dest, [], keep_files=[".git", ".svn"])

        plan = Cleaner(site).plan()

        assert plan.obsolete == ()
        assert plan.existing == frozenset()

    def test_protection_matches_whole_segments(self, dest: Path, make_tree: MakeTree) -> None:
        """A .git fragment does not protect .github or .gitignore."""
        make_tree(dest, [".git/HEAD", ".github/workflows/ci.yml", ".gitignore"])
        site = _site(dest, [], keep_files=[".git"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {
            ".github",
            ".github/workflows",
            ".github/workflows/ci.yml",
            ".gitignore",
        }

    def test_nested_protected_file_keeps_parent_dirs(
        self, dest: Path, make_tree: MakeTree
    ) -> None:
        """Protecting a nested file protects the directories leading to it."""
        make_tree(dest, ["assets/keep/me.txt", "assets/keep/other.txt", "assets/old.css"])
        site = _site(dest, [], keep_files=["assets/keep/me.txt"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {"assets/keep/other.txt", "assets/old.css"}

    def test_keep_files_joined_by_site(self, dest: Path) -> None:
        """Protected paths are placed under the destination by the site."""
        site = MagicMock()
        site.dest = str(dest)
        site.keep_files = ["assets/keep"]
        site.in_dest_dir.return_value = str(dest / "assets" / "keep")
        site.list_dest.return_value = [str(dest / "assets"), str(dest / "other")]
        site.each_output_item.return_value = []

        plan = Cleaner(site).plan()

        site.in_dest_dir.assert_called_once_with("assets/keep")
        assert _rel(plan.obsolete, dest) == {"other"}

    def test_dotfile_not_protected_is_obsolete(self, dest: Path, make_tree: MakeTree) -> None:
        """Hidden files are listed and deleted like any other file."""
        make_tree(dest, [".DS_Store", "index.html"])
        site = _site(dest, ["index.html"])

        plan = Cleaner(site).plan()

        assert _rel(plan.obsolete, dest) == {".DS_Store"}

    def test_self_and_parent_entries_filtered(self, dest: Path) -> None:
        """Self/parent directory entries never enter the existing set."""
        lister = MagicMock()
        lister.glob.return_value = [f"{dest}/.", f"{dest}/sub/..", f"{dest}/sub", f"{dest}/sub/."]
        site = StaticSite(dest=str(dest), keep_files=[], lister=lister)

        plan = Cleaner(site).plan()

        assert plan.existing == frozenset({str(dest / "sub")})
        lister.glob.assert_called_once_with(str(dest), include_hidden=True)

    def test_missing_destination_is_empty_plan(self, tmp_path: Path) -> None:
        """A destination that does not exist yet has nothing to clean."""
        site = _site(tmp_path / "missing", ["index.html"])

        plan = Cleaner(site).plan()

        assert plan.is_empty

    def test_computed_destination_receives_root(self, dest: Path) -> None:
        """Computed destinations are called with the destination root."""
        compute = MagicMock(return_value=str(dest / "feed.xml"))
        site = StaticSite(dest=str(dest), keep_files=[], outputs=[ComputedDestination(compute)])

        plan = Cleaner(site).plan()

        compute.assert_called_once_with(str(dest))
        assert plan.output_files == frozenset({str(dest / "feed.xml")})

    def test_direct_destination_is_normalized(self, dest: Path, make_tree: MakeTree) -> None:
        """Direct destinations with redundant segments match existing files."""
        make_tree(dest, ["docs/index.html"])
        item = DirectDestination(f"{dest}/docs/./extra/../index.html")
        site = StaticSite(dest=str(dest), keep_files=[], outputs=[item])

        plan = Cleaner(site).plan()

        assert plan.obsolete == ()

    def test_unknown_output_item_fails(self, dest: Path) -> None:
        """Output items of an unsupported shape raise ResolutionError."""
        site = StaticSite(dest=str(dest), keep_files=[], outputs=["index.html"])  # type: ignore[list-item]

        with pytest.raises(ResolutionError):
            Cleaner(site).plan()

    def test_output_outside_destination_fails(self, dest: Path, tmp_path: Path) -> None:
        """Output paths outside the destination raise ResolutionError."""
        site = StaticSite(
            dest=str(dest),
            keep_files=[],
            outputs=[DirectDestination(str(tmp_path / "elsewhere.html"))],
        )

        with pytest.raises(ResolutionError, match="outside the destination"):
            Cleaner(site).plan()

    def test_output_equal_to_destination_fails(self, dest: Path) -> None:
        """The destination root itself is not a valid output path."""
        site = StaticSite(dest=str(dest), keep_files=[], outputs=[DirectDestination(str(dest))])

        with pytest.raises(ResolutionError):
            Cleaner(site).plan()


class TestCleanerCleanup:
    """Tests for Cleaner.cleanup()."""

    def test_cleanup_leaves_outputs_and_protected(
        self, dest: Path, make_tree: MakeTree, list_tree: ListTree
    ) -> None:
        """After cleanup only outputs, their parents and protected paths remain."""
        make_tree(
            dest,
            ["index.html", "old.html", "img/logo.png", ".git/HEAD", "about/index.html", "a"],
        )
        site = _site(dest, ["index.html", "about/index.html", "a/b.html"])

        Cleaner(site).cleanup()

        assert list_tree(dest) == {".git", ".git/HEAD", "index.html", "about", "about/index.html"}

    def test_cleanup_is_idempotent(self, dest: Path, make_tree: MakeTree) -> None:
        """A second cleanup with the same outputs finds nothing to delete."""
        make_tree(dest, ["index.html", "old/page.html", ".cache/x"])
        site = _site(dest, ["index.html"])
        cleaner = Cleaner(site)

        cleaner.cleanup()

        assert cleaner.plan().is_empty
        assert cleaner.obsolete_files() == []

    def test_cleanup_missing_destination(self, tmp_path: Path) -> None:
        """Cleanup of a destination that does not exist is a no-op."""
        site = _site(tmp_path / "missing", ["index.html"])

        Cleaner(site).cleanup()

        assert not (tmp_path / "missing").exists()

    def test_hook_receives_obsolete_files(self, dest: Path, make_tree: MakeTree) -> None:
        """The on_obsolete hook is triggered with the paths before deletion."""
        make_tree(dest, ["old.html"])
        seen: list[list[str]] = []
        hooks = HookRegistry()
        hooks.register(
            HOOK_OWNER,
            HOOK_EVENT,
            lambda paths: seen.append([p for p in paths if os.path.exists(p)]),
        )

        Cleaner(_site(dest, []), hooks=hooks).cleanup()

        assert seen == [[str(dest / "old.html")]]
        assert not (dest / "old.html").exists()

    def test_hook_triggered_when_nothing_obsolete(self, dest: Path) -> None:
        """The hook fires with an empty list when there is nothing to delete."""
        callback = MagicMock()
        hooks = HookRegistry()
        hooks.register(HOOK_OWNER, HOOK_EVENT, callback)

        Cleaner(_site(dest, []), hooks=hooks).cleanup()

        callback.assert_called_once_with([])

    def test_listing_failure_aborts_before_deletion(self, dest: Path) -> None:
        """Listing errors propagate and nothing is deleted."""
        lister = MagicMock()
        lister.glob.side_effect = ListingError("Cannot list /dest/private: Permission denied")
        operator = MagicMock()
        site = StaticSite(dest=str(dest), keep_files=[], lister=lister)

        with pytest.raises(ListingError):
            Cleaner(site, operator=operator).cleanup()

        operator.delete.assert_not_called()

    def test_deletion_failure_raises_after_all_attempts(
        self, dest: Path, make_tree: MakeTree
    ) -> None:
        """Failed deletions are collected and raised as DeletionError."""
        make_tree(dest, ["a.html", "b.html"])
        operator = MagicMock()
        operator.delete.return_value = [
            DeletionResult(path=str(dest / "a.html"), success=False, error="Permission denied"),
            DeletionResult(path=str(dest / "b.html"), success=True),
        ]

        with pytest.raises(DeletionError) as exc_info:
            Cleaner(_site(dest, []), operator=operator).cleanup()

        assert [f.path for f in exc_info.value.failures] == [str(dest / "a.html")]
        operator.delete.assert_called_once_with([str(dest / "a.html"), str(dest / "b.html")])

    def test_apply_skips_operator_for_empty_plan(self, dest: Path) -> None:
        """Applying an empty plan does not call the operator."""
        operator = MagicMock()
        cleaner = Cleaner(_site(dest, []), operator=operator)

        assert cleaner.apply(cleaner.plan()) == []
        operator.delete.assert_not_called()
