"""Shared parsing utilities for spreadsheet-exported numbers.

Spreadsheet exports in the en-GB locale use:
- Comma (,) as thousands separator
- Period (.) as decimal separator
- Scientific notation for long integers such as MPAN identifiers

This module provides the scalar conversions used across the variable sheet,
the chart sheet, and the display formatter.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

_NULL_TOKENS = frozenset({"", "-", "null"})
_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_SCIENTIFIC_RE = re.compile(r"^([+-]?)(\d+)(?:\.(\d+))?[eE]([+-]?\d+)$")


def to_number(value: Any) -> float | None:
    """Parse a spreadsheet cell as a number.

    Examples
    --------
    - "1,234.50" -> 1234.5
    - "  42 " -> 42.0
    - "1.1E+9" -> 1100000000.0
    - "-" -> None
    - "NULL" -> None

    Parameters
    ----------
    value
        Raw cell value; non-strings are converted with ``str``.

    Returns
    -------
    float | None
        Parsed finite number, or None when the value is blank, a null marker,
        or not a decimal literal.
    """
    if value is None:
        return None

    text = str(value).replace(",", "").strip()
    if text.lower() in _NULL_TOKENS:
        return None

    if not _NUMERIC_RE.match(text):
        logger.debug("Could not parse number: %s", value)
        return None

    try:
        result = float(Decimal(text))
    except (InvalidOperation, OverflowError):
        logger.debug("Could not parse number: %s", value)
        return None

    return result if math.isfinite(result) else None


def expand_scientific(raw: Any) -> str:
    """Rewrite a scientific-notation literal as a plain digit string.

    Spreadsheets render long identifiers like ``1234567890123`` as
    ``1.23457E+12``; this recovers the digits the export kept.

    The result is a plain decimal literal rather than the joined mantissa
    digits. A decimal point is kept when fraction digits remain after the
    shift and negative exponents produce leading zeros. A leading ``+`` is
    dropped.

    Examples
    --------
    - "1.23E+5" -> "123000"
    - "1.1E+9" -> "1100000000"
    - "1.2345E+2" -> "123.45"
    - "1.5E-3" -> "0.0015"
    - "abc" -> "abc"

    Parameters
    ----------
    raw
        Value to expand; non-strings are converted with ``str``.

    Returns
    -------
    str
        Expanded digits, or the trimmed input when it is not in scientific
        notation.
    """
    text = str(raw).strip()
    match = _SCIENTIFIC_RE.match(text)
    if not match:
        return text

    sign, int_digits, frac_digits, exponent_str = match.groups()
    digits = int_digits + (frac_digits or "")
    point = len(int_digits) + int(exponent_str)

    if point >= len(digits):
        integer_part, fraction_part = digits.ljust(point, "0"), ""
    elif point <= 0:
        integer_part, fraction_part = "0", "0" * -point + digits
    else:
        integer_part, fraction_part = digits[:point], digits[point:]

    integer_part = integer_part.lstrip("0") or "0"
    expanded = f"{integer_part}.{fraction_part}" if fraction_part else integer_part
    return f"-{expanded}" if sign == "-" else expanded


def format_number(value: float, max_decimals: int = 0) -> str:
    """Render a number with en-GB grouping and at most ``max_decimals`` digits.

    Trailing fractional zeros are dropped and ties round away from zero, so
    ``1234.56`` with one decimal renders as ``"1,234.6"`` and ``12.0`` as
    ``"12"``.
    """
    quantum = Decimal(1).scaleb(-max_decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def round_to(value: float, places: int = 2) -> float:
    """Round a computed value for display tables and chart arrays."""
    return round(value, places)


def format_plain(value: float) -> str:
    """Render a number without grouping, dropping a redundant ``.0``."""
    return str(int(value)) if float(value).is_integer() else repr(float(value))
