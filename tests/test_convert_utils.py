"""
Tests for the byte-count helpers behind --chunk-size, --min-size and the summary.
"""
import pytest
from photocleanup.utils.convert_utils import ConvertUtils


class TestParseSize:
    """Command-line sizes to bytes."""

    def test_plain_numbers_are_bytes(self):
        assert ConvertUtils.parse_size("0") == 0
        assert ConvertUtils.parse_size("65536") == 65536

    def test_binary_units(self):
        assert ConvertUtils.parse_size("1B") == 1
        assert ConvertUtils.parse_size("64K") == 65536
        assert ConvertUtils.parse_size("64KB") == 65536
        assert ConvertUtils.parse_size("64KiB") == 65536
        assert ConvertUtils.parse_size("1.5K") == 1536
        assert ConvertUtils.parse_size("1M") == 1024 ** 2
        assert ConvertUtils.parse_size("2G") == 2 * 1024 ** 3

    def test_case_and_whitespace(self):
        assert ConvertUtils.parse_size(" 64k ") == 65536
        assert ConvertUtils.parse_size("1mib") == 1024 ** 2

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            ConvertUtils.parse_size("-1")
        with pytest.raises(ValueError, match="cannot be negative"):
            ConvertUtils.parse_size("-64K")

    def test_minimum_rejects_zero_chunk(self):
        """A chunk of zero bytes could never make progress through a file."""
        with pytest.raises(ValueError, match="at least 1 byte"):
            ConvertUtils.parse_size("0", minimum=1)
        with pytest.raises(ValueError, match="at least 1 byte"):
            ConvertUtils.parse_size("0.1B", minimum=1)
        assert ConvertUtils.parse_size("1", minimum=1) == 1

    @pytest.mark.parametrize("value", ["", "invalid", "1.2.3KB", "1KB2", "K", "1 XB", "1.K"])
    def test_rejects_invalid_formats(self, value):
        with pytest.raises(ValueError, match="Invalid size"):
            ConvertUtils.parse_size(value)


class TestFormatSize:
    """Bytes to display strings."""

    def test_small_counts_stay_in_bytes(self):
        assert ConvertUtils.format_size(0) == "0 B"
        assert ConvertUtils.format_size(1023) == "1023 B"

    def test_binary_units(self):
        assert ConvertUtils.format_size(1536) == "1.50 KiB"
        assert ConvertUtils.format_size(55513) == "54.21 KiB"
        assert ConvertUtils.format_size(3 * 1024 ** 3) == "3.00 GiB"

    def test_largest_unit_is_tib(self):
        assert ConvertUtils.format_size(2048 * 1024 ** 4) == "2048.00 TiB"

    def test_negative_is_zero(self):
        assert ConvertUtils.format_size(-5) == "0 B"
