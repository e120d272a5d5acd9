"""Exclusion rules based on absolute paths, relative paths and bare names."""

import os
import warnings
from dataclasses import dataclass
from typing import FrozenSet, List, NamedTuple, Sequence, Set, Tuple

from treecopy.exceptions import ConfigError, StaleExclusionWarning
from treecopy.types import NOT_EXCLUDED, ExclusionReason, ExclusionVerdict, PathType

from .base_rules import BaseExclusionRules


def has_separator(entry: str) -> bool:
    """Return True if the entry contains a path separator.

    Forward slashes count as separators on every platform so that the same
    exclusion list works on Windows and POSIX systems. A backslash is a separator
    only where the platform uses it (Windows). On POSIX it is an ordinary file name
    character, so ``sub\\dir`` is a bare name there and matches only an entry
    literally named ``sub\\dir``.

    Example:
        >>> has_separator("sub/dir")
        True
        >>> has_separator("node_modules")
        False
    """
    return "/" in entry or os.sep in entry or (os.altsep is not None and os.altsep in entry)


def normalize_path(path: PathType) -> str:
    """Normalize a path for comparison.

    Makes the path absolute, resolves ``.`` and ``..`` components, canonicalizes
    separators and applies the platform's case convention. Symlinks are not resolved.

    Example:
        >>> import os
        >>> normalize_path("/data/./src/../src/sub/") == os.path.normcase(os.path.abspath("/data/src/sub"))
        True
    """
    return os.path.normcase(os.path.abspath(os.fspath(path)))


@dataclass(frozen=True)
class ExclusionSpec:
    """Immutable description of what to leave out of a copy.

    Each of the three sequences holds exclusion entries. An entry is an absolute
    path, a relative path containing a separator, or a bare name without a separator.
    Path entries in ``excluded_dir_paths`` only apply to directories and those in
    ``excluded_file_paths`` only to files; a bare name in either list matches every
    entry of that kind with that name. Names in ``excluded_names`` match both files
    and directories anywhere in the tree.

    Attributes:
        excluded_dir_paths (Tuple[str, ...]): Directory exclusions.
        excluded_file_paths (Tuple[str, ...]): File exclusions.
        excluded_names (Tuple[str, ...]): Bare names excluded for any entry kind.

    Raises:
        ConfigError: If an entry is empty or a name in excluded_names contains a separator.

    Example:
        >>> spec = ExclusionSpec(excluded_dir_paths=["build"], excluded_names=["node_modules"])
        >>> spec.excluded_dir_paths
        ('build',)
        >>> spec.is_empty()
        False
        >>> ExclusionSpec(excluded_names=["a/b"])
        Traceback (most recent call last):
        ...
        treecopy.exceptions.ConfigError: Excluded name 'a/b' must not contain a path separator
    """

    excluded_dir_paths: Tuple[str, ...] = ()
    excluded_file_paths: Tuple[str, ...] = ()
    excluded_names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for field_name in ("excluded_dir_paths", "excluded_file_paths", "excluded_names"):
            values = getattr(self, field_name)
            if isinstance(values, (str, os.PathLike)):
                raise ConfigError(f"{field_name} must be a sequence of entries, not a single path")
            entries = tuple(os.fspath(value) for value in values)
            for entry in entries:
                if not entry.strip():
                    raise ConfigError(f"Empty exclusion entry in {field_name}")
            object.__setattr__(self, field_name, entries)

        for name in self.excluded_names:
            if has_separator(name):
                raise ConfigError(f"Excluded name '{name}' must not contain a path separator")

    def is_empty(self) -> bool:
        """Return True if no exclusion entries are configured."""
        return not (self.excluded_dir_paths or self.excluded_file_paths or self.excluded_names)


class _PathEntry(NamedTuple):
    key: str
    path: str
    raw: str


class _RuleSet(NamedTuple):
    """Resolved exclusion entries for one entry kind (files or directories)."""

    absolute: Tuple[_PathEntry, ...]
    relative: Tuple[_PathEntry, ...]
    relative_keys: FrozenSet[str]
    names: FrozenSet[str]


class ExclusionMatcher(BaseExclusionRules):
    """Classifies candidate paths against an ExclusionSpec.

    Path entries are resolved once, at construction: relative entries are joined
    against the source root, absolute entries are kept as given. Bare names stay
    unresolved. Matching is evaluated in this order, and the first hit wins:

    1. Absolute entries of the candidate's kind: normalized equality, and only while
       the excluded path exists on disk. A missing path is ignored, never an error.
    2. Relative entries of the candidate's kind: normalized equality with the entry
       resolved against the source root.
    3. Bare names of the candidate's kind, then ``excluded_names``: equality with the
       candidate's base name at any depth.

    Case sensitivity follows ``os.path.normcase``.

    Attributes:
        spec (ExclusionSpec): The exclusion specification.
        source_root (str): Absolute, normalized source root used to resolve relative entries.

    Example:
        >>> import tempfile, os
        >>> with tempfile.TemporaryDirectory() as root:
        ...     spec = ExclusionSpec(excluded_dir_paths=["sub/dir"], excluded_names=["skip"])
        ...     matcher = ExclusionMatcher(spec, root)
        ...     matcher.match(os.path.join(root, "sub", "dir"), is_dir=True).reason.name
        ...     matcher.match(os.path.join(root, "other", "dir"), is_dir=True).excluded
        ...     matcher.match(os.path.join(root, "a", "b", "skip"), is_dir=False).reason.name
        'RELATIVE_MATCH'
        False
        'NAME_MATCH'
    """

    def __init__(self, spec: ExclusionSpec, source_root: PathType, warn_stale: bool = False) -> None:
        """Resolve the exclusion entries against the source root.

        Args:
            spec: The exclusion specification.
            source_root: Root of the tree being copied. Relative entries are resolved against it.
            warn_stale: Emit a StaleExclusionWarning for each path entry that does not exist.
        """
        self.spec = spec
        self.source_root = os.path.abspath(os.fspath(source_root))
        self._dir_rules = self._resolve(spec.excluded_dir_paths)
        self._file_rules = self._resolve(spec.excluded_file_paths)
        self._names = frozenset(os.path.normcase(name) for name in spec.excluded_names)

        if warn_stale:
            for entry in self.stale_entries():
                warnings.warn(
                    f"Exclusion entry '{entry}' does not exist and will be ignored", StaleExclusionWarning, stacklevel=2
                )

    def _resolve_relative(self, entry: str) -> str:
        """Join a relative entry against the source root.

        An entry that starts with the source directory's own name (``data/sub`` when
        copying ``/mnt/data``) is taken relative to the source's parent when only that
        reading names an existing path.
        """
        joined = os.path.join(self.source_root, entry)
        first = entry.replace(os.sep, "/").split("/", 1)[0]
        if first == os.path.basename(self.source_root) and not os.path.exists(joined):
            from_parent = os.path.join(os.path.dirname(self.source_root), entry)
            if os.path.exists(from_parent):
                return os.path.abspath(from_parent)
        return os.path.abspath(joined)

    def _resolve(self, entries: Sequence[str]) -> _RuleSet:
        absolute: List[_PathEntry] = []
        relative: List[_PathEntry] = []
        names: Set[str] = set()

        for entry in entries:
            if os.path.isabs(entry):
                path = os.path.abspath(entry)
                absolute.append(_PathEntry(os.path.normcase(path), path, entry))
            elif has_separator(entry):
                path = self._resolve_relative(entry)
                relative.append(_PathEntry(os.path.normcase(path), path, entry))
            else:
                names.add(os.path.normcase(entry))

        return _RuleSet(
            absolute=tuple(absolute),
            relative=tuple(relative),
            relative_keys=frozenset(entry.key for entry in relative),
            names=frozenset(names),
        )

    def match(self, path: str, is_dir: bool) -> ExclusionVerdict:
        """Classify a candidate path.

        Args:
            path: Absolute path of the candidate.
            is_dir: True if the candidate is a directory.

        Returns:
            The verdict and its reason code. Only the existence check for absolute
            entries touches the filesystem, and it never raises.
        """
        rules = self._dir_rules if is_dir else self._file_rules
        key = normalize_path(path)

        for entry in rules.absolute:
            if key == entry.key and os.path.exists(entry.path):
                return ExclusionVerdict(True, ExclusionReason.ABSOLUTE_MATCH)

        if key in rules.relative_keys:
            return ExclusionVerdict(True, ExclusionReason.RELATIVE_MATCH)

        name = os.path.basename(key)
        if name in rules.names or name in self._names:
            return ExclusionVerdict(True, ExclusionReason.NAME_MATCH)

        return NOT_EXCLUDED

    def stale_entries(self) -> List[str]:
        """Return the path entries that do not name an existing path.

        Bare names are never stale. Directory entries come first, and within each
        kind absolute entries precede relative ones.

        Returns:
            The raw entries, as configured, whose resolved path does not exist.
        """
        stale: List[str] = []
        for rules in (self._dir_rules, self._file_rules):
            for entry in rules.absolute + rules.relative:
                if not os.path.exists(entry.path):
                    stale.append(entry.raw)
        return stale

    def has_rules(self) -> bool:
        """Check if any exclusion entries are configured.

        Returns:
            True if at least one entry is configured, False otherwise.
        """
        return not self.spec.is_empty()
