"""Command-line argument parsing for treecopy.

This module defines the command-line interface for treecopy,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from treecopy import __version__
from treecopy.exceptions import ConfigError


class PathListAction(argparse.Action):
    """Action that accumulates exclusion entries across repeated options.

    Each value may hold several entries joined with os.pathsep (``a:b:c`` on POSIX,
    ``a;b;c`` on Windows). Entries are appended in command-line order and empty
    segments are dropped.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        kwargs.setdefault("default", [])
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        # Copy so the shared default list is never mutated
        entries = list(getattr(namespace, self.dest, None) or [])
        if values is not None:
            entries.extend(part for part in str(values).split(os.pathsep) if part)
        setattr(namespace, self.dest, entries)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with treecopy's options.
    """
    description = """
    treecopy: Recursively copy a directory tree, leaving out what you do not need.

    Copies SOURCE into DESTINATION, preserving the directory structure, while
    skipping excluded directories, excluded files, anything with an excluded
    name, and files outside a size range.

    Exclusion entries can be:
    - absolute paths (/data/src/cache), matched exactly while the path exists
    - relative paths containing a separator (sub/dir), resolved against SOURCE
    - bare names without a separator (node_modules), matched at any depth

    Size limits are inclusive and accept B, K, M, G and T suffixes in powers of 1024.
    """

    epilog = """
    Examples:
      # Copy a tree as is
      treecopy /media/user/HDD/data /media/user/SSD/data

      # Leave out a specific nested directory and every node_modules directory
      treecopy -D sub/build -x node_modules src/ backup/

      # Several entries in one option, separated like PATH
      treecopy -x .git:.venv:__pycache__ src/ backup/

      # Only copy files between 1 KiB and 500 MiB
      treecopy -m 1K -M 500M src/ backup/

      # Show what would be copied without copying anything
      treecopy -n -x node_modules src/ backup/

      # Keep going past unreadable directories and print a summary
      treecopy -k -s stderr src/ backup/
    """

    parser = argparse.ArgumentParser(
        prog="treecopy",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"treecopy {__version__}", help="Show the version and exit"
    )

    parser.add_argument("source", type=Path, help="The directory to copy.")
    parser.add_argument("destination", type=Path, help="The directory to copy into. Created if it does not exist.")
    parser.add_argument(
        "-D",
        "--exclude-dir",
        metavar="PATHS",
        action=PathListAction,
        help=(
            "Directory to exclude: an absolute path, a path relative to SOURCE, or a bare directory name. "
            f"Separate several entries with '{os.pathsep}'; can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-F",
        "--exclude-file",
        metavar="PATHS",
        action=PathListAction,
        help=(
            "File to exclude: an absolute path, a path relative to SOURCE, or a bare file name. "
            f"Separate several entries with '{os.pathsep}'; can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-x",
        "--exclude-name",
        metavar="NAMES",
        action=PathListAction,
        help=(
            "Name of files and directories to exclude wherever they occur in the tree. "
            f"Separate several names with '{os.pathsep}'; can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-m",
        "--min-size",
        metavar="SIZE",
        help="Skip files smaller than SIZE (e.g. 1000B, 1500K, 2M). Files of exactly SIZE are copied.",
    )
    parser.add_argument(
        "-M",
        "--max-size",
        metavar="SIZE",
        help="Skip files larger than SIZE (e.g. 1500M, 2G). Files of exactly SIZE are copied.",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print the tree that would be copied without creating or copying anything.",
    )
    parser.add_argument(
        "-S",
        "--sort",
        action="store_true",
        help="Visit directory entries in lexicographic order instead of the order the filesystem lists them.",
    )
    parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help=(
            "Skip entries that cannot be read or written, and subtrees whose destination cannot be created, "
            "instead of stopping at the first error."
        ),
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print summary report. Valid destinations: stderr, stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print the decision taken for every entry. Repeat (-vv) for debug logging.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ConfigError: If any arguments fail validation.
    """
    if not args.source.is_dir():
        raise ConfigError(f"Source '{args.source}' is not a directory")

    if args.destination.exists() and not args.destination.is_dir():
        raise ConfigError(f"Destination '{args.destination}' exists and is not a directory")
