"""Extractor module for delimited spreadsheet exports.

Key Functions
-------------
parse_delimited
    Parse comma/tab/semicolon text into header-keyed records.
parse_rows
    Parse into a header and positional rows.
detect_delimiter
    Choose the delimiter from a header line.
serialize_delimited
    Write rows back out with compatible quoting.
"""

from tariff_report.extractor.delimited import (
    CANDIDATE_DELIMITERS,
    count_delimiter,
    detect_delimiter,
    parse_delimited,
    parse_rows,
    serialize_delimited,
    split_lines,
    split_row,
)

__all__ = [
    "CANDIDATE_DELIMITERS",
    "count_delimiter",
    "detect_delimiter",
    "parse_delimited",
    "parse_rows",
    "serialize_delimited",
    "split_lines",
    "split_row",
]
