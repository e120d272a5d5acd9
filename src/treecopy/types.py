from enum import Enum
from os import PathLike
from typing import Callable, NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class ExclusionReason(Enum):
    """Enumeration of the reasons an entry is left out of the copy.

    Reason codes are diagnostic only; they never change which entries are copied.

    Attributes:
        NONE: The entry is not excluded.
        ABSOLUTE_MATCH: Matched an absolute path exclusion entry.
        RELATIVE_MATCH: Matched a relative path exclusion entry (resolved against the source root).
        NAME_MATCH: Matched a bare name exclusion entry.
        SIZE_OUT_OF_RANGE: File size falls outside the configured size bounds.
        UNSUPPORTED_TYPE: Neither a directory nor a regular file (FIFO, socket, dangling symlink, ...).
    """

    NONE = "none"
    ABSOLUTE_MATCH = "absolute_match"
    RELATIVE_MATCH = "relative_match"
    NAME_MATCH = "name_match"
    SIZE_OUT_OF_RANGE = "size_out_of_range"
    UNSUPPORTED_TYPE = "unsupported_type"


class ExclusionVerdict(NamedTuple):
    """Result of classifying a single path."""

    excluded: bool
    reason: ExclusionReason


NOT_EXCLUDED = ExclusionVerdict(False, ExclusionReason.NONE)

# Signature of the per-entry decision callback: (path, is_dir, excluded, reason)
DecisionCallback = Callable[[str, bool, bool, ExclusionReason], None]

# Signature of the byte-copy primitive: (source, destination) -> bytes written
CopyFunction = Callable[[str, str], int]
