"""Error action enum for handling filesystem errors during a copy."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when a filesystem operation fails during the walk.

    Values:
        RAISE: Abort the whole copy on the first failure (default behavior)
        SKIP: Log the failure, skip the affected entry (or subtree, for a destination
            directory that cannot be created) and continue with its siblings
    """

    RAISE = "raise"
    SKIP = "skip"
