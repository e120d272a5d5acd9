"""Filtered directory tree copy.

This module provides the copy_tree() entry point, which wires an exclusion
specification and size bounds into a FilteredWalker and runs it.
"""

from typing import Optional, Union

from treecopy.copy_tree.copy_report import CopyReport
from treecopy.copy_tree.error_action import ErrorAction
from treecopy.copy_tree.filtered_walker import FilteredWalker
from treecopy.exclusion_rules.path_rules import ExclusionMatcher, ExclusionSpec
from treecopy.exclusion_rules.size_rules import SizeBounds
from treecopy.io.chunked_file_copier import copy_file_contents
from treecopy.types import CopyFunction, DecisionCallback, PathType


def copy_tree(
    source: PathType,
    destination: PathType,
    *,
    exclusion_spec: Optional[ExclusionSpec] = None,
    size_bounds: Optional[SizeBounds] = None,
    error_action: Union[str, ErrorAction] = ErrorAction.RAISE,
    sort_entries: bool = False,
    dry_run: bool = False,
    on_decision: Optional[DecisionCallback] = None,
    copy_file: CopyFunction = copy_file_contents,
    warn_stale: bool = False,
) -> CopyReport:
    """Copy a directory tree, leaving out excluded entries and out-of-range files.

    Relative exclusion entries are resolved against source.

    Args:
        source: Directory to copy.
        destination: Directory to copy into. Created if it does not exist.
        exclusion_spec: Directories, files and names to leave out. Defaults to none.
        size_bounds: Inclusive file size range. Defaults to unbounded.
        error_action: How to handle filesystem errors ("raise" or "skip").
        sort_entries: Visit directory entries in lexicographic order.
        dry_run: Report what would be copied without touching the destination.
        on_decision: Callback invoked as (path, is_dir, excluded, reason) per entry.
        copy_file: Function copying one file's bytes, returning the bytes written.
        warn_stale: Emit a StaleExclusionWarning for path entries that do not exist.

    Returns:
        The report of the walk.

    Raises:
        ConfigError: If the configuration or the roots are invalid.
        CopyIOError: If a filesystem operation fails and error_action is "raise".

    Example:
        >>> report = copy_tree(  # doctest: +SKIP
        ...     "/data/project",
        ...     "/backup/project",
        ...     exclusion_spec=ExclusionSpec(excluded_names=("node_modules", ".git")),
        ...     size_bounds=SizeBounds.from_strings(max_size="10M"),
        ... )
        >>> print(report.format_summary())  # doctest: +SKIP
    """
    matcher = None
    if exclusion_spec is not None and not exclusion_spec.is_empty():
        matcher = ExclusionMatcher(exclusion_spec, source, warn_stale=warn_stale)

    walker = FilteredWalker(
        matcher,
        size_bounds,
        copy_file=copy_file,
        on_decision=on_decision,
        error_action=error_action,
        sort_entries=sort_entries,
        dry_run=dry_run,
    )
    return walker.walk(source, destination)
