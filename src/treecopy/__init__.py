"""Filtered recursive directory copy.

This package copies a directory tree while leaving out excluded directories,
files and names, and files outside a configured size range.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treecopy")
except PackageNotFoundError:
    __version__ = "unknown"
