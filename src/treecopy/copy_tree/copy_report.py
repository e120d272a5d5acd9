"""Outcome of a filtered copy: counts, failures and the tree of retained entries."""

import os
from collections import Counter
from typing import Dict, Iterator, List, NamedTuple

from humanfriendly import format_size

from treecopy.copy_tree.copy_plan_node import CopyPlanNode
from treecopy.types import ExclusionReason


class CopyFailure(NamedTuple):
    """A filesystem failure that was skipped under ErrorAction.SKIP."""

    operation: str
    path: str
    error: OSError


class CopyReport:
    """Accumulates the result of walking a source tree.

    The report counts created directories, copied files and bytes, records every
    excluded entry by reason, and keeps the failures that were skipped. Retained
    entries are also arranged in a tree of CopyPlanNode objects that mirrors the
    destination, which is what a dry run prints.

    Attributes:
        source_root (str): Absolute source root of the walk.
        destination_root (str): Absolute destination root of the walk.
        tree (CopyPlanNode): Root node of the retained-entry tree.
        directory_count (int): Directories created below the destination root.
        file_count (int): Files copied.
        bytes_copied (int): Total bytes copied (or that would be copied, in a dry run).
        excluded (Counter): Number of excluded entries per ExclusionReason.
        failures (List[CopyFailure]): Failures skipped under ErrorAction.SKIP.

    Example:
        >>> report = CopyReport("/data/src", "/backup/dst")
        >>> report.add_directory("docs")
        >>> report.add_file(os.path.join("docs", "readme.md"), 120)
        >>> report.add_excluded(ExclusionReason.NAME_MATCH)
        >>> print(report.get_tree_representation())
        dst/
        └── docs/
            └── readme.md
        >>> report.file_count, report.excluded_count
        (1, 1)
    """

    def __init__(self, source_root: str, destination_root: str) -> None:
        self.source_root = source_root
        self.destination_root = destination_root
        self.tree = CopyPlanNode(os.path.basename(destination_root.rstrip(os.sep)) or destination_root, is_dir=True)
        self._nodes: Dict[str, CopyPlanNode] = {"": self.tree}
        self.directory_count = 0
        self.file_count = 0
        self.bytes_copied = 0
        self.excluded: Counter[ExclusionReason] = Counter()
        self.failures: List[CopyFailure] = []

    def _parent_node(self, relative_path: str) -> CopyPlanNode:
        return self._nodes.get(os.path.dirname(relative_path), self.tree)

    def add_directory(self, relative_path: str) -> None:
        """Record a directory created at the destination.

        Args:
            relative_path: Path of the directory relative to the roots.
        """
        node = CopyPlanNode(os.path.basename(relative_path), parent=self._parent_node(relative_path), is_dir=True)
        self._nodes[relative_path] = node
        self.directory_count += 1

    def add_file(self, relative_path: str, size: int) -> None:
        """Record a copied file.

        Args:
            relative_path: Path of the file relative to the roots.
            size: Number of bytes copied.
        """
        CopyPlanNode(os.path.basename(relative_path), parent=self._parent_node(relative_path), file_size=size)
        self.file_count += 1
        self.bytes_copied += size

    def add_excluded(self, reason: ExclusionReason) -> None:
        """Record an entry left out of the copy."""
        self.excluded[reason] += 1

    def add_failure(self, operation: str, path: str, error: OSError) -> None:
        """Record a failure that was skipped rather than raised."""
        self.failures.append(CopyFailure(operation, path, error))

    @property
    def excluded_count(self) -> int:
        """Total number of excluded entries across all reasons."""
        return sum(self.excluded.values())

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the retained entries one line at a time.

        Generates output similar to the Unix 'tree' command. Directories are listed
        before files, both alphabetically.

        Yields:
            Lines of the tree representation, without trailing newlines.
        """

        def write_node(
            node: CopyPlanNode, prefix: str = "", is_last: bool = True, is_root: bool = False
        ) -> Iterator[str]:
            if is_root:
                yield f"{node.name}/"
            else:
                connector = "└── " if is_last else "├── "
                suffix = "/" if node.is_dir else ""
                yield f"{prefix}{connector}{node.name}{suffix}"

            if node.is_dir:
                sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
                for i, child in enumerate(sorted_children):
                    child_is_last = i == len(sorted_children) - 1
                    if is_root:
                        new_prefix = ""
                    else:
                        new_prefix = prefix + ("    " if is_last else "│   ")
                    yield from write_node(child, new_prefix, child_is_last)

        yield from write_node(self.tree, is_root=True)

    def get_tree_representation(self) -> str:
        """Return the complete tree representation as a single string."""
        return "\n".join(self.stream_tree_representation())

    def format_summary(self) -> str:
        """Format the counts into a human-readable string.

        Returns:
            A formatted string showing all counts with appropriate labels.
        """
        result = [
            f"Directories: {self.directory_count}",
            f"Files: {self.file_count}",
            f"Bytes: {self.bytes_copied} ({format_size(self.bytes_copied, binary=True)})",
            f"Excluded: {self.excluded_count}",
        ]
        for reason, count in sorted(self.excluded.items(), key=lambda item: item[0].value):
            result.append(f"  {reason.name.lower().replace('_', ' ')}: {count}")

        if self.failures:
            result.append(f"Failures: {len(self.failures)}")

        return "\n".join(result)
