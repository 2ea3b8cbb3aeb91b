"""Shared utility functions for tariff_report package."""

from tariff_report.utils.parsing import (
    expand_scientific,
    format_number,
    format_plain,
    round_to,
    to_number,
)

__all__ = [
    "expand_scientific",
    "format_number",
    "format_plain",
    "round_to",
    "to_number",
]
