"""Tests for scalar number parsing and rendering."""

from __future__ import annotations

import pytest

from tariff_report.utils.parsing import (
    expand_scientific,
    format_number,
    format_plain,
    round_to,
    to_number,
)


class TestToNumber:
    """Tests for to_number."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1,234.50", 1234.5),
            ("  42 ", 42.0),
            ("-1500", -1500.0),
            ("+5", 5.0),
            (".5", 0.5),
            ("1.1E+9", 1_100_000_000.0),
            (12, 12.0),
        ],
    )
    def test_parses_numbers(self, raw: object, expected: float) -> None:
        """Numeric text (with grouping or exponent) should parse."""
        assert to_number(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, "", "   ", "-", "NULL", "null", "abc", "12abc", "inf", "1e999"],
    )
    def test_absent_values(self, raw: object) -> None:
        """Blanks, null markers, text, and non-finite values are absent."""
        assert to_number(raw) is None


class TestExpandScientific:
    """Tests for expand_scientific."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1.23E+5", "123000"),
            ("1.1E+9", "1100000000"),
            ("1.234567890123E+12", "1234567890123"),
            ("1.2345E+2", "123.45"),
            ("1.5E-3", "0.0015"),
            ("0.5E+1", "5"),
            ("0E+0", "0"),
            ("-2E+3", "-2000"),
            ("+1.2E+2", "120"),
            (" 1.23e5 ", "123000"),
        ],
    )
    def test_expands(self, raw: str, expected: str) -> None:
        """Scientific literals should become plain digit strings."""
        assert expand_scientific(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1234567890123", "12.5", "E+5", "1.2E"])
    def test_passes_through(self, raw: str) -> None:
        """Strings without a full exponent form are returned unchanged."""
        assert expand_scientific(raw) == raw


class TestFormatNumber:
    """Tests for en-GB number rendering."""

    @pytest.mark.parametrize(
        ("value", "decimals", "expected"),
        [
            (1234.56, 1, "1,234.6"),
            (12.0, 1, "12"),
            (12.345, 1, "12.3"),
            (1500, 0, "1,500"),
            (1234.5, 0, "1,235"),
            (0.05, 1, "0.1"),
            (-0.04, 1, "0"),
            (-2500.75, 0, "-2,501"),
            (1250000, 1, "1,250,000"),
        ],
    )
    def test_format_number(self, value: float, decimals: int, expected: str) -> None:
        """Grouping, trailing-zero trimming, and half-up rounding."""
        assert format_number(value, decimals) == expected

    def test_format_plain(self) -> None:
        """Integral floats drop their ``.0``; others keep their repr."""
        assert format_plain(20.0) == "20"
        assert format_plain(12.5) == "12.5"

    def test_round_to(self) -> None:
        """Values round to two places by default."""
        assert round_to(2.345678) == 2.35
        assert round_to(200.0) == 200.0
