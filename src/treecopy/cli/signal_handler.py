"""Broken pipe handling for the treecopy CLI.

Verbose decisions, dry-run trees and summaries are often piped into tools such as
``head`` that exit before reading everything. The CLI then stops quietly with the
conventional SIGPIPE exit status instead of reporting an I/O error.
"""

import os
import sys

# 128 + SIGPIPE, as reported by shells for a process killed by a broken pipe
EXIT_BROKEN_PIPE = 141


def silence_stdout() -> None:
    """Redirect stdout to the null device.

    Called once the reader of stdout has gone away, so that the final flush at
    interpreter shutdown does not raise a second BrokenPipeError.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
