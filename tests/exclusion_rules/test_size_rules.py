"""Unit tests for size bounds."""

import pytest

from treecopy.exceptions import ConfigError
from treecopy.exclusion_rules.size_rules import SizeBounds, parse_file_size


class TestParseFileSize:
    """Test the parse_file_size utility function."""

    def test_parse_bytes_only(self):
        """Test parsing raw byte values."""
        assert parse_file_size("1024") == 1024
        assert parse_file_size("0") == 0
        assert parse_file_size("999999") == 999999

    def test_parse_byte_suffix(self):
        assert parse_file_size("1000B") == 1000

    def test_parse_binary_suffixes(self):
        """Test the single-letter suffixes count in powers of 1024."""
        assert parse_file_size("1500K") == 1500 * 1024
        assert parse_file_size("1500M") == 1500 * 1024**2
        assert parse_file_size("2G") == 2 * 1024**3
        assert parse_file_size("1T") == 1024**4

    def test_parse_iec_units(self):
        assert parse_file_size("1KiB") == 1024
        assert parse_file_size("1MiB") == 1048576

    def test_parse_with_spaces(self):
        assert parse_file_size("2 K") == 2048

    def test_parse_fractional(self):
        assert parse_file_size("1.5K") == 1536

    def test_parse_invalid_format(self):
        """Test that invalid formats raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid size format"):
            parse_file_size("invalid")

        with pytest.raises(ConfigError, match="Invalid size format"):
            parse_file_size("")

        with pytest.raises(ConfigError, match="Invalid size format"):
            parse_file_size("1XB")

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_file_size("lots")


class TestSizeBounds:
    """Test the SizeBounds class."""

    def test_default_is_unbounded(self):
        bounds = SizeBounds()
        assert not bounds.has_rules()
        assert bounds.contains(0)
        assert bounds.contains(10**15)

    def test_bounds_are_inclusive(self):
        bounds = SizeBounds(100, 1000)
        assert not bounds.contains(99)
        assert bounds.contains(100)
        assert bounds.contains(500)
        assert bounds.contains(1000)
        assert not bounds.contains(1001)

    def test_zero_min_means_no_lower_bound(self):
        bounds = SizeBounds(0, 10)
        assert bounds.contains(0)
        assert bounds.contains(10)
        assert not bounds.contains(11)

    def test_zero_max_means_no_upper_bound(self):
        bounds = SizeBounds(10, 0)
        assert not bounds.contains(9)
        assert bounds.contains(10)
        assert bounds.contains(10**12)
        assert bounds.upper is None

    def test_min_equal_to_max(self):
        bounds = SizeBounds(42, 42)
        assert bounds.contains(42)
        assert not bounds.contains(41)
        assert not bounds.contains(43)

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ConfigError, match="exceeds maximum file size"):
            SizeBounds(1000, 100)

    def test_negative_bounds_rejected(self):
        with pytest.raises(ConfigError, match="cannot be negative"):
            SizeBounds(-1, 100)
        with pytest.raises(ConfigError, match="cannot be negative"):
            SizeBounds(0, -5)

    def test_has_rules(self):
        assert SizeBounds(1, 0).has_rules()
        assert SizeBounds(0, 1).has_rules()

    def test_is_immutable(self):
        bounds = SizeBounds(1, 2)
        with pytest.raises(AttributeError):
            bounds.min_size = 5

    def test_from_strings(self):
        bounds = SizeBounds.from_strings("1K", "2M")
        assert bounds.min_size == 1024
        assert bounds.max_size == 2 * 1024**2

    def test_from_strings_with_none(self):
        bounds = SizeBounds.from_strings(None, None)
        assert bounds == SizeBounds(0, 0)

    def test_from_strings_with_ints(self):
        assert SizeBounds.from_strings(10, 20) == SizeBounds(10, 20)

    def test_from_strings_invalid_type(self):
        with pytest.raises(ConfigError, match="min_size must be string or int"):
            SizeBounds.from_strings(1.5, None)
        with pytest.raises(ConfigError, match="max_size must be string or int"):
            SizeBounds.from_strings(None, True)

    def test_from_strings_negative_int(self):
        with pytest.raises(ConfigError, match="max_size cannot be negative"):
            SizeBounds.from_strings(None, -1)

    def test_from_strings_inconsistent(self):
        with pytest.raises(ConfigError, match="exceeds maximum file size"):
            SizeBounds.from_strings("2K", "1K")
