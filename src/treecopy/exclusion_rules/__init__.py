"""Exclusion rules for filtering files and directories during a copy."""

from .base_rules import BaseExclusionRules
from .path_rules import ExclusionMatcher, ExclusionSpec
from .size_rules import SizeBounds, parse_file_size

__all__ = [
    "BaseExclusionRules",
    "ExclusionMatcher",
    "ExclusionSpec",
    "SizeBounds",
    "parse_file_size",
]
