"""Display formatting for report values.

This module provides functions to:
- Render currency, percentages, durations and metered quantities
- Expand MPAN identifiers exported in scientific notation
- Pick the right rendering for a record key via an ordered rule table

Rules are evaluated in :data:`FORMAT_RULES` order and the first match wins,
so ``savings_percent`` is a percentage (not currency) and
``tariff.current.day_p_kwh`` is a rate (not a kWh quantity).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tariff_report.utils.parsing import expand_scientific, format_number, to_number

CURRENCY_SYMBOL = "£"
_MONEY_MARKERS = ("savings", "payment", "cost", "deposit", "price", "bill")
_RATE_SUFFIXES = (
    ("_p_kwh", "p/kWh"),
    ("_p_day", "p/day"),
    ("_p_kva_day", "p/kVA/day"),
)
_QUANTITY_SUFFIXES = (
    ("_kwh", "kWh"),
    ("_kva", "kVA"),
)


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def format_mpan(raw: Any) -> str:
    """Return an MPAN as plain digits, expanding scientific notation."""
    cleaned = _clean(raw)
    if not cleaned:
        return ""
    return expand_scientific(cleaned)


def format_currency(value: Any) -> str:
    """Format a value as whole pounds using accounting negatives.

    Examples
    --------
    - "1500" -> "£1,500"
    - "-1500" -> "(£1,500)"
    - 199.6 -> "£200"
    - "£12" -> "£12" (already formatted)
    - "TBC" -> "TBC"
    """
    text = _clean(value)
    if not text:
        return ""
    if text.startswith(CURRENCY_SYMBOL):
        return text

    number = to_number(text)
    if number is None:
        return text

    formatted = format_number(abs(number), 0)
    if number < 0:
        return f"({CURRENCY_SYMBOL}{formatted})"
    return f"{CURRENCY_SYMBOL}{formatted}"


def format_percent(value: Any) -> str:
    """Format a value as a percentage with at most one decimal."""
    text = _clean(value)
    if not text:
        return ""
    if "%" in text:
        return text

    number = to_number(text)
    if number is None:
        return text
    return f"{format_number(number, 1)}%"


def format_years(value: Any) -> str:
    """Format a payback period in years with at most one decimal."""
    text = _clean(value)
    if not text:
        return ""

    number = to_number(text)
    if number is None:
        return text
    return f"{format_number(number, 1)} years"


def format_unit(value: Any, unit: str) -> str:
    """Format a metered quantity with grouping and a unit label."""
    text = _clean(value)
    if not text:
        return ""

    number = to_number(text)
    if number is None:
        return text
    return f"{format_number(number, 1)} {unit}".strip()


def format_rate(value: Any, unit: str) -> str:
    """Append a rate unit to the value as written in the sheet."""
    if not _clean(value):
        return ""
    return f"{value} {unit}"


def _format_default(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class FormatRule:
    """A key predicate paired with the renderer it selects."""

    name: str
    matches: Callable[[str], bool]
    render: Callable[[str, Any], str]


def _suffix_unit(key: str, suffixes: tuple[tuple[str, str], ...]) -> str | None:
    for suffix, unit in suffixes:
        if key.endswith(suffix):
            return unit
    return None


def _render_rate(key: str, raw: Any) -> str:
    return format_rate(raw, _suffix_unit(key, _RATE_SUFFIXES) or "")


def _render_quantity(key: str, raw: Any) -> str:
    return format_unit(raw, _suffix_unit(key, _QUANTITY_SUFFIXES) or "")


def _is_money(key: str) -> bool:
    return any(marker in key for marker in _MONEY_MARKERS) or key.endswith("_gbp")


FORMAT_RULES: tuple[FormatRule, ...] = (
    FormatRule("mpan", lambda key: "mpan" in key, lambda _key, raw: format_mpan(raw)),
    FormatRule("percent", lambda key: "percent" in key, lambda _key, raw: format_percent(raw)),
    FormatRule("roi", lambda key: "roi" in key, lambda _key, raw: format_years(raw)),
    FormatRule("rate", lambda key: _suffix_unit(key, _RATE_SUFFIXES) is not None, _render_rate),
    FormatRule(
        "quantity",
        lambda key: _suffix_unit(key, _QUANTITY_SUFFIXES) is not None,
        _render_quantity,
    ),
    FormatRule("currency", _is_money, lambda _key, raw: format_currency(raw)),
)


def match_rule(key: str) -> FormatRule | None:
    """Return the first rule whose predicate accepts ``key``."""
    for rule in FORMAT_RULES:
        if rule.matches(key):
            return rule
    return None


def format_by_key(key: str, raw: Any) -> str:
    """Render a raw record value for display based on its key.

    Parameters
    ----------
    key
        Dotted record key (e.g., ``"capital_cost_gbp"``).
    raw
        Raw value from the record; may be empty or ``None``.

    Returns
    -------
    str
        Display string. Values that cannot be parsed as numbers are returned
        unchanged rather than raising.
    """
    rule = match_rule(key)
    if rule is None:
        return _format_default(raw)
    return rule.render(key, raw)
