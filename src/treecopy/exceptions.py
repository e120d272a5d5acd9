from typing import Optional


class ConfigError(ValueError):
    """
    Exception raised when the copy configuration is invalid.

    Raised for malformed exclusion entries, unparsable or inconsistent size bounds, and
    unusable source or destination roots. It is always raised before any file is copied.

    Example:
        >>> error = ConfigError("Invalid size format 'abc'")
        >>> str(error)
        "Invalid size format 'abc'"
        >>> isinstance(error, ValueError)
        True
    """

    pass


class CopyIOError(OSError):
    """
    Exception raised when a filesystem operation fails during the copy.

    Wraps the underlying OSError with the path and the operation that failed. The original
    error is available as ``__cause__`` and its errno is preserved.

    Attributes:
        path (str): Path the failing operation was applied to.
        operation (str): Short description of the operation, e.g. "list directory".

    Example:
        >>> error = CopyIOError("list directory", "/data/private", PermissionError(13, "Permission denied"))
        >>> error.path
        '/data/private'
        >>> str(error)
        'Failed to list directory /data/private: Permission denied'
    """

    def __init__(self, operation: str, path: str, cause: Optional[OSError] = None) -> None:
        """
        Initialize the exception with the failed operation and path.

        Args:
            operation (str): Description of the operation that failed.
            path (str): Path the operation was applied to.
            cause (Optional[OSError]): The underlying error, if any.
        """
        self.operation = operation
        self.path = path
        reason = (cause.strerror or str(cause)) if cause is not None else "unknown error"
        errno = cause.errno if cause is not None else None
        super().__init__(errno, f"Failed to {operation} {path}: {reason}")
        self.filename = path

    def __str__(self) -> str:
        return self.strerror or ""


class StaleExclusionWarning(UserWarning):
    """
    Warning issued for an exclusion entry that names a path which does not exist.

    Such entries are ignored: the copy proceeds as if the entry were absent.

    Example:
        >>> import warnings
        >>> with warnings.catch_warnings(record=True) as caught:
        ...     warnings.simplefilter("always")
        ...     warnings.warn("/gone", StaleExclusionWarning)
        >>> caught[0].category.__name__
        'StaleExclusionWarning'
    """

    pass
