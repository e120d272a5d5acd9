"""Size bounds for filtering files by their byte count."""

from dataclasses import dataclass
from typing import Optional, Union

from humanfriendly import InvalidSize, parse_size

from treecopy.exceptions import ConfigError


def parse_file_size(size_str: str) -> int:
    """Parse human-readable file size to bytes.

    Unit suffixes are binary: ``K`` and ``KB`` are 1024 bytes and ``M`` is 1024 KiB.

    Args:
        size_str: Size string like '1500K', '500M', '1000B', '1GiB' or just '1024'

    Returns:
        Size in bytes

    Raises:
        ConfigError: If size_str is not a valid size format

    Example:
        >>> parse_file_size("1500K")
        1536000
        >>> parse_file_size("1000B")
        1000
        >>> parse_file_size("2M")
        2097152
    """
    if not isinstance(size_str, str) or not size_str.strip():
        raise ConfigError(f"Invalid size format '{size_str}': empty size")

    try:
        size = int(parse_size(size_str, binary=True))
    except InvalidSize as e:
        raise ConfigError(f"Invalid size format '{size_str}': {e}") from e

    if size < 0:
        raise ConfigError(f"Invalid size format '{size_str}': size cannot be negative")
    return size


def _to_bytes(value: Union[str, int, None], label: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ConfigError(f"{label} must be string or int, got {type(value)}")
    if isinstance(value, str):
        return parse_file_size(value)
    if isinstance(value, int):
        if value < 0:
            raise ConfigError(f"{label} cannot be negative")
        return value
    raise ConfigError(f"{label} must be string or int, got {type(value)}")


@dataclass(frozen=True)
class SizeBounds:
    """Inclusive byte-size range a file must fall in to be copied.

    A bound of ``0`` means the range is open on that side: ``min_size=0`` admits
    every file up to ``max_size`` and ``max_size=0`` admits every file from
    ``min_size`` upwards. A file whose size equals either bound is inside the range.
    Directories are never subject to size bounds.

    Attributes:
        min_size (int): Smallest admitted size in bytes, or 0 for no lower bound.
        max_size (int): Largest admitted size in bytes, or 0 for no upper bound.

    Raises:
        ConfigError: If a bound is negative or min_size exceeds a non-zero max_size.

    Example:
        >>> bounds = SizeBounds(100, 1000)
        >>> bounds.contains(100), bounds.contains(1000), bounds.contains(1001)
        (True, True, False)
        >>> SizeBounds().contains(0)
        True
        >>> SizeBounds.from_strings("1K", None).max_size
        0
    """

    min_size: int = 0
    max_size: int = 0

    def __post_init__(self) -> None:
        if self.min_size < 0 or self.max_size < 0:
            raise ConfigError("Size bounds cannot be negative")
        if self.max_size and self.min_size > self.max_size:
            raise ConfigError(
                f"Minimum file size ({self.min_size} bytes) exceeds maximum file size ({self.max_size} bytes)"
            )

    @classmethod
    def from_strings(
        cls, min_size: Union[str, int, None] = None, max_size: Union[str, int, None] = None
    ) -> "SizeBounds":
        """Build bounds from human-readable sizes or raw byte counts.

        Args:
            min_size: Lower bound ('100B', '2K', 2048) or None for no lower bound.
            max_size: Upper bound ('1G', 1073741824) or None for no upper bound.

        Returns:
            The parsed bounds.

        Raises:
            ConfigError: If either value cannot be parsed or the bounds are inconsistent.
        """
        return cls(_to_bytes(min_size, "min_size"), _to_bytes(max_size, "max_size"))

    @property
    def upper(self) -> Optional[int]:
        """Upper bound in bytes, or None when unbounded."""
        return self.max_size or None

    def contains(self, size: int) -> bool:
        """Check whether a file size lies within the bounds (inclusive on both ends).

        Args:
            size: File size in bytes.

        Returns:
            True if the file should be copied, False if it is out of range.
        """
        if size < self.min_size:
            return False
        if self.max_size and size > self.max_size:
            return False
        return True

    def has_rules(self) -> bool:
        """Check if any size limit is configured.

        Returns:
            True if either bound is set, False otherwise.
        """
        return self.min_size > 0 or self.max_size > 0
