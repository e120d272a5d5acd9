from abc import ABC, abstractmethod

from treecopy.types import ExclusionVerdict


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Implementations classify a candidate path and report both whether it is excluded and
    why. Callers that only need the yes/no answer use exclude().

    Example:
        >>> from treecopy.types import ExclusionReason, NOT_EXCLUDED
        >>> class NoHiddenRules(BaseExclusionRules):
        ...     def match(self, path: str, is_dir: bool) -> ExclusionVerdict:
        ...         if path.rsplit("/", 1)[-1].startswith("."):
        ...             return ExclusionVerdict(True, ExclusionReason.NAME_MATCH)
        ...         return NOT_EXCLUDED
        >>> rules = NoHiddenRules()
        >>> rules.exclude("/src/.git", is_dir=True)
        True
        >>> rules.match("/src/main.py", is_dir=False).reason
        <ExclusionReason.NONE: 'none'>
    """

    @abstractmethod
    def match(self, path: str, is_dir: bool) -> ExclusionVerdict:
        """
        Classify a path against the configured rules.

        Args:
            path (str): Absolute path of the candidate file or directory.
            is_dir (bool): True if the candidate is a directory.

        Returns:
            ExclusionVerdict: Whether the path is excluded and the reason code.
        """
        pass

    def exclude(self, path: str, is_dir: bool) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Absolute path of the candidate file or directory.
            is_dir (bool): True if the candidate is a directory.

        Returns:
            bool: True if the path should be excluded, False if it should be copied.
        """
        return self.match(path, is_dir).excluded
