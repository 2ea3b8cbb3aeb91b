"""Transformer module for value formatting and derived metrics.

Submodules
----------
formatter
    Key-driven display formatting (currency, percent, years, units, MPAN).
cost_bands
    Day/Night/Red/Amber/Green cost breakdown for current and Optima tariffs.

Key Functions
-------------
format_by_key
    Render a raw record value according to its key.
compute_cost_bands
    Derive per-band costs and their display table from the record.
"""

# Formatter must load before cost_bands (see tariff_report.sheets)
from tariff_report.transformer.formatter import (
    FORMAT_RULES,
    FormatRule,
    format_by_key,
    format_currency,
    format_mpan,
    format_percent,
    format_rate,
    format_unit,
    format_years,
    match_rule,
)

from tariff_report.transformer.cost_bands import BANDS, BandSpec, CostBands, compute_cost_bands

__all__ = [
    # Cost bands
    "BANDS",
    "BandSpec",
    "CostBands",
    "compute_cost_bands",
    # Formatter
    "FORMAT_RULES",
    "FormatRule",
    "format_by_key",
    "format_currency",
    "format_mpan",
    "format_percent",
    "format_rate",
    "format_unit",
    "format_years",
    "match_rule",
]
