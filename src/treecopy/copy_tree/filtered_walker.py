"""Depth-first copy of a directory tree with exclusion rules and size bounds.

This module provides the FilteredWalker class, which mirrors the retained subset of a
source tree under a destination root and delegates the byte copy of each file to a
pluggable copy function.
"""

import logging
import os
from typing import NamedTuple, Optional, Union

from treecopy.copy_tree.copy_report import CopyReport
from treecopy.copy_tree.error_action import ErrorAction
from treecopy.exceptions import ConfigError, CopyIOError
from treecopy.exclusion_rules.base_rules import BaseExclusionRules
from treecopy.exclusion_rules.size_rules import SizeBounds
from treecopy.io.chunked_file_copier import copy_file_contents
from treecopy.types import (
    NOT_EXCLUDED,
    CopyFunction,
    DecisionCallback,
    ExclusionReason,
    ExclusionVerdict,
    PathType,
)

logger = logging.getLogger(__name__)


class _Roots(NamedTuple):
    """Top-level source and destination roots, fixed for the whole walk."""

    source: str
    destination: str


def is_within(path: str, root: str) -> bool:
    """Return True if path is root itself or lies below it.

    Example:
        >>> is_within("/data/src/backup", "/data/src")
        True
        >>> is_within("/data/src-backup", "/data/src")
        False
    """
    path = os.path.normcase(os.path.abspath(path))
    root = os.path.normcase(os.path.abspath(root))
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Paths on different drives
        return False


class FilteredWalker:
    """Copies a directory tree depth-first, skipping excluded entries.

    For each directory level the walker lists the children, asks the exclusion rules
    whether each child is skipped, checks files against the size bounds, and mirrors
    retained entries under the destination. Destination paths are always computed
    relative to the roots passed to walk(), so the destination is a pure relabeling
    of the retained source structure. Directories are created before their contents
    are visited, so a retained directory whose children are all excluded still
    appears, empty, at the destination.

    Directories are detected without following symbolic links. Entries that are
    neither directories nor regular files (after following links) are skipped with
    ExclusionReason.UNSUPPORTED_TYPE and never opened.

    Error Handling:
        Failures are handled according to error_action:
        - RAISE (default): any failure aborts the walk with a CopyIOError
        - SKIP: the failure is logged and recorded in the report; a failed listing,
          metadata read or file copy skips that entry, and a destination directory
          that cannot be created skips its subtree

        Creating the destination root is always fatal.

    Attributes:
        exclusion_rules (Optional[BaseExclusionRules]): Rules deciding which entries are skipped.
        size_bounds (SizeBounds): Inclusive file size range.
        error_action (ErrorAction): How to handle filesystem errors.
        sort_entries (bool): Visit children in lexicographic order instead of listing order.
        dry_run (bool): Decide and report without creating or copying anything.

    Example:
        >>> walker = FilteredWalker(size_bounds=SizeBounds(100, 1000))  # doctest: +SKIP
        >>> report = walker.walk("/data/src", "/backup/src")  # doctest: +SKIP
        >>> report.file_count  # doctest: +SKIP
        42
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        size_bounds: Optional[SizeBounds] = None,
        *,
        copy_file: CopyFunction = copy_file_contents,
        on_decision: Optional[DecisionCallback] = None,
        error_action: Union[str, ErrorAction] = ErrorAction.RAISE,
        sort_entries: bool = False,
        dry_run: bool = False,
    ) -> None:
        """Initialize a FilteredWalker.

        Args:
            exclusion_rules: Rules for excluding files and directories. Defaults to None.
            size_bounds: Inclusive file size range. Defaults to unbounded.
            copy_file: Function copying one file's bytes, returning the bytes written.
            on_decision: Callback invoked as (path, is_dir, excluded, reason) for every
                visited entry.
            error_action: How to handle filesystem errors, either an ErrorAction or
                "raise"/"skip". Defaults to RAISE.
            sort_entries: Sort children by name before visiting them. Defaults to False,
                which keeps the order the filesystem lists them in.
            dry_run: Skip all directory creation and file copies. Defaults to False.

        Raises:
            ConfigError: If error_action is not a valid action.
        """
        if isinstance(error_action, str) and not isinstance(error_action, ErrorAction):
            try:
                error_action = ErrorAction(error_action.lower())
            except ValueError:
                raise ConfigError(f"Invalid error_action: {error_action}. Must be one of: 'raise', 'skip'")

        self.exclusion_rules = exclusion_rules
        self.size_bounds = size_bounds if size_bounds is not None else SizeBounds()
        self.copy_file = copy_file
        self.on_decision = on_decision
        self.error_action = error_action
        self.sort_entries = sort_entries
        self.dry_run = dry_run

    def walk(self, src_dir: PathType, dst_dir: PathType) -> CopyReport:
        """Copy the retained subset of src_dir into dst_dir.

        Args:
            src_dir: Existing source directory.
            dst_dir: Destination directory. Created if missing; existing files in it are
                overwritten when the source has a file at the same relative path.

        Returns:
            A report of what was copied, excluded and skipped.

        Raises:
            ConfigError: If src_dir is not a directory, or dst_dir lies inside src_dir
                without being excluded by the exclusion rules.
            CopyIOError: If a filesystem operation fails and error_action is RAISE, or
                if the destination root cannot be created.
        """
        roots = _Roots(os.path.abspath(os.fspath(src_dir)), os.path.abspath(os.fspath(dst_dir)))

        if not os.path.isdir(roots.source):
            raise ConfigError(f"'{src_dir}' is not a valid directory")
        if is_within(roots.destination, roots.source) and not self._destination_excluded(roots):
            raise ConfigError(
                f"Destination '{dst_dir}' must not be inside the source directory '{src_dir}' "
                "unless it is excluded from the copy"
            )

        report = CopyReport(roots.source, roots.destination)

        if not self.dry_run:
            try:
                os.makedirs(roots.destination, exist_ok=True)
            except OSError as e:
                raise CopyIOError("create directory", roots.destination, e) from e

        logger.debug("Copying %s to %s", roots.source, roots.destination)
        self._copy_directory(roots.source, roots, report)
        return report

    def _destination_excluded(self, roots: _Roots) -> bool:
        """Return True if the exclusion rules keep the walk out of a nested destination.

        The destination itself or any directory between it and the source root must be
        excluded. The source root is never a candidate.
        """
        path = roots.destination
        while path != roots.source and is_within(path, roots.source):
            if self._match(path, is_dir=True).excluded:
                return True
            parent = os.path.dirname(path)
            if parent == path:
                break
            path = parent
        return False

    def _copy_directory(self, src_dir: str, roots: _Roots, report: CopyReport) -> None:
        """Visit the children of one source directory."""
        try:
            with os.scandir(src_dir) as it:
                entries = list(it)
        except OSError as e:
            self._handle_error("list directory", src_dir, e, report)
            return

        if self.sort_entries:
            entries.sort(key=lambda entry: entry.name)

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                self._handle_error("read metadata of", entry.path, e, report)
                continue

            if is_dir:
                self._visit_directory(entry, roots, report)
            else:
                self._visit_file(entry, roots, report)

    def _visit_directory(self, entry: "os.DirEntry[str]", roots: _Roots, report: CopyReport) -> None:
        verdict = self._match(entry.path, is_dir=True)
        if verdict.excluded:
            self._record_excluded(entry.path, True, verdict.reason, report)
            return

        relative_path = os.path.relpath(entry.path, roots.source)
        destination = os.path.join(roots.destination, relative_path)

        if not self.dry_run:
            try:
                os.makedirs(destination, exist_ok=True)
            except OSError as e:
                self._handle_error("create directory", destination, e, report)
                return

        report.add_directory(relative_path)
        self._notify(entry.path, True, False, ExclusionReason.NONE)
        self._copy_directory(entry.path, roots, report)

    def _visit_file(self, entry: "os.DirEntry[str]", roots: _Roots, report: CopyReport) -> None:
        verdict = self._match(entry.path, is_dir=False)
        if verdict.excluded:
            self._record_excluded(entry.path, False, verdict.reason, report)
            return

        try:
            if not entry.is_file():
                self._record_excluded(entry.path, False, ExclusionReason.UNSUPPORTED_TYPE, report)
                return
            size = entry.stat().st_size
        except OSError as e:
            self._handle_error("read metadata of", entry.path, e, report)
            return

        if not self.size_bounds.contains(size):
            self._record_excluded(entry.path, False, ExclusionReason.SIZE_OUT_OF_RANGE, report)
            return

        relative_path = os.path.relpath(entry.path, roots.source)
        destination = os.path.join(roots.destination, relative_path)

        if self.dry_run:
            written = size
        else:
            try:
                written = self.copy_file(entry.path, destination)
            except OSError as e:
                self._handle_error("copy file", entry.path, e, report)
                return

        logger.debug("Copied %s -> %s (%d bytes)", entry.path, destination, written)
        report.add_file(relative_path, written)
        self._notify(entry.path, False, False, ExclusionReason.NONE)

    def _match(self, path: str, is_dir: bool) -> ExclusionVerdict:
        if self.exclusion_rules is None:
            return NOT_EXCLUDED
        return self.exclusion_rules.match(path, is_dir)

    def _record_excluded(self, path: str, is_dir: bool, reason: ExclusionReason, report: CopyReport) -> None:
        logger.debug("Excluded %s (%s)", path, reason.name)
        report.add_excluded(reason)
        self._notify(path, is_dir, True, reason)

    def _notify(self, path: str, is_dir: bool, excluded: bool, reason: ExclusionReason) -> None:
        if self.on_decision is not None:
            self.on_decision(path, is_dir, excluded, reason)

    def _handle_error(self, operation: str, path: str, error: OSError, report: CopyReport) -> None:
        if self.error_action == ErrorAction.RAISE:
            raise CopyIOError(operation, path, error) from error
        logger.warning("Failed to %s %s, skipping: %s", operation, path, error.strerror or error)
        report.add_failure(operation, path, error)
