"""Filtered copying of directory trees.

This module provides the walker that mirrors a source tree into a destination while
applying exclusion rules and size bounds, along with the report it produces.
"""
