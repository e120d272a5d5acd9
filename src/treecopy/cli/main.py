"""Command-line interface for treecopy.

This module provides the command-line interface for treecopy, allowing users to copy
a directory tree while excluding directories, files, names and out-of-range file sizes.
It handles command-line argument parsing, logging setup, per-entry verbose output and
the mapping of errors to exit codes.

Exit Codes:
    0: Successful completion
    1: Runtime error during the copy, or entries skipped with -k/--keep-going
    2: Command-line syntax or configuration error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Output pipe closed by the reader (SIGPIPE) on Unix-like systems

Example:
    # Copy a tree, leaving out every node_modules directory
    $ treecopy -x node_modules /path/to/src /path/to/dst

    # Preview the copy
    $ treecopy -n -m 1K /path/to/src /path/to/dst
"""

import logging
import sys
from typing import Dict

from treecopy.cli.argparser import create_parser, validate_args
from treecopy.cli.signal_handler import EXIT_BROKEN_PIPE, silence_stdout
from treecopy.copy_tree.error_action import ErrorAction
from treecopy.exceptions import ConfigError
from treecopy.exclusion_rules.path_rules import ExclusionSpec
from treecopy.exclusion_rules.size_rules import SizeBounds
from treecopy.treecopy import copy_tree
from treecopy.types import ExclusionReason

logger = logging.getLogger(__name__)

REASON_DESCRIPTIONS: Dict[ExclusionReason, str] = {
    ExclusionReason.ABSOLUTE_MATCH: "excluded by absolute path",
    ExclusionReason.RELATIVE_MATCH: "excluded by relative path",
    ExclusionReason.NAME_MATCH: "excluded by name",
    ExclusionReason.SIZE_OUT_OF_RANGE: "size out of range",
    ExclusionReason.UNSUPPORTED_TYPE: "not a regular file",
}


def format_decision(path: str, is_dir: bool, excluded: bool, reason: ExclusionReason) -> str:
    """Format a single walker decision for verbose output.

    Args:
        path: Absolute source path of the entry.
        is_dir: Whether the entry is a directory.
        excluded: Whether the entry was left out.
        reason: Why the entry was left out.

    Returns:
        A one-line description of the decision.

    Example:
        >>> format_decision("/src/node_modules", True, True, ExclusionReason.NAME_MATCH)
        "directory '/src/node_modules' ignored: excluded by name"
        >>> format_decision("/src/a.txt", False, False, ExclusionReason.NONE)
        "file '/src/a.txt' included"
    """
    kind = "directory" if is_dir else "file"
    if excluded:
        return f"{kind} '{path}' ignored: {REASON_DESCRIPTIONS.get(reason, reason.name.lower())}"
    return f"{kind} '{path}' included"


def print_decision(path: str, is_dir: bool, excluded: bool, reason: ExclusionReason) -> None:
    """Decision callback printing each decision to stdout."""
    print(format_decision(path, is_dir, excluded, reason), flush=True)


def configure_logging(verbosity: int) -> None:
    """Configure logging for the command-line run.

    Args:
        verbosity: Number of -v flags. 0 shows warnings, 1 adds the configuration
            summary, 2 or more enables debug output.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    logging.captureWarnings(True)


def main() -> None:
    """Main entry point for the treecopy command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during the copy, or entries skipped with -k/--keep-going
        2: Command-line syntax or configuration error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Output pipe closed by the reader (SIGPIPE) on Unix-like systems
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args()

    configure_logging(args.verbose)

    try:
        validate_args(args)

        exclusion_spec = ExclusionSpec(
            excluded_dir_paths=tuple(args.exclude_dir),
            excluded_file_paths=tuple(args.exclude_file),
            excluded_names=tuple(args.exclude_name),
        )
        size_bounds = SizeBounds.from_strings(args.min_size, args.max_size)

        logger.info("Source: %s", args.source.resolve())
        logger.info("Destination: %s", args.destination.resolve())
        logger.info("Excluded directories: %s", list(exclusion_spec.excluded_dir_paths))
        logger.info("Excluded files: %s", list(exclusion_spec.excluded_file_paths))
        logger.info("Excluded names: %s", list(exclusion_spec.excluded_names))
        logger.info("Min file size: %d bytes", size_bounds.min_size)
        logger.info("Max file size: %s", f"{size_bounds.max_size} bytes" if size_bounds.max_size else "unbounded")

        report = copy_tree(
            args.source,
            args.destination,
            exclusion_spec=exclusion_spec,
            size_bounds=size_bounds,
            error_action=ErrorAction.SKIP if args.keep_going else ErrorAction.RAISE,
            sort_entries=args.sort,
            dry_run=args.dry_run,
            on_decision=print_decision if args.verbose else None,
            warn_stale=args.verbose > 0,
        )

        if args.dry_run:
            for line in report.stream_tree_representation():
                print(line)

        if args.summary == "stdout":
            print("\n" + report.format_summary())
        elif args.summary == "stderr":
            print(report.format_summary(), file=sys.stderr)

        if report.failures:
            print(f"Warning: {len(report.failures)} entries could not be copied.", file=sys.stderr)
            sys.exit(1)

    except ConfigError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        silence_stdout()
        sys.exit(EXIT_BROKEN_PIPE)
    except OSError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
