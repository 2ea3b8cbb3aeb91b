"""Delimited-text parsing for spreadsheet exports.

Both input sheets arrive as exported text whose delimiter depends on the
exporting tool (comma, tab or semicolon). Parsing happens in three passes:

1. :func:`split_lines` breaks the text into logical lines, keeping newlines
   that appear inside quoted fields.
2. :func:`detect_delimiter` picks the delimiter from the header line.
3. :func:`split_row` splits each line into trimmed fields.

:func:`parse_delimited` combines them into header-keyed records and
:func:`serialize_delimited` writes rows back out with matching quoting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

QUOTE = '"'
CANDIDATE_DELIMITERS: tuple[str, ...] = (",", "\t", ";")


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def split_lines(text: str) -> list[str]:
    """Split raw text into logical lines.

    A newline inside a quoted field is kept as content. Quote characters are
    left in place so :func:`split_row` can apply the same rules per field. A
    trailing whitespace-only line (typically from a final newline) is dropped.

    Parameters
    ----------
    text
        Entire file contents.

    Returns
    -------
    list[str]
        Lines without their terminators.
    """
    lines: list[str] = []
    start = 0
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == QUOTE:
            if i + 1 < length and text[i + 1] == QUOTE:
                # Escaped quote: both characters stay in the line
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "\n" and not in_quotes:
            lines.append(_strip_cr(text[start:i]))
            start = i + 1
        i += 1

    if in_quotes:
        logger.debug("Unterminated quoted field; flushing remaining text as final line")

    last = text[start:]
    if last.strip():
        lines.append(_strip_cr(last))
    return lines


def count_delimiter(line: str, delimiter: str) -> int:
    """Count occurrences of ``delimiter`` in ``line`` outside quotes."""
    count = 0
    quoted = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if i + 1 < len(line) and line[i + 1] == QUOTE:
                i += 1
            else:
                quoted = not quoted
        elif char == delimiter and not quoted:
            count += 1
        i += 1
    return count


def detect_delimiter(header_line: str, candidates: Sequence[str] = CANDIDATE_DELIMITERS) -> str:
    """Choose the delimiter with the highest unquoted count in the header.

    Ties keep the earlier candidate; a header with no candidate at all yields
    the first candidate (comma).

    Parameters
    ----------
    header_line
        First logical line of the text.
    candidates
        Delimiters in priority order.

    Returns
    -------
    str
        The chosen delimiter.
    """
    delimiter = candidates[0]
    best_count = -1
    for candidate in candidates:
        count = count_delimiter(header_line, candidate)
        if count > best_count:
            best_count = count
            delimiter = candidate
    return delimiter


def split_row(line: str, delimiter: str) -> list[str]:
    """Split one logical line into trimmed fields.

    Quotes toggle quoted mode and are removed; a doubled quote yields one
    literal quote. The delimiter only separates fields outside quotes.
    """
    fields: list[str] = []
    buffer: list[str] = []
    quoted = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if i + 1 < length and line[i + 1] == QUOTE:
                buffer.append(QUOTE)
                i += 1
            else:
                quoted = not quoted
        elif char == delimiter and not quoted:
            fields.append("".join(buffer).strip())
            buffer = []
        else:
            buffer.append(char)
        i += 1

    fields.append("".join(buffer).strip())
    return fields


def parse_rows(text: str) -> tuple[list[str], list[list[str]]]:
    """Parse text into a header and positional data rows.

    Parameters
    ----------
    text
        Entire file contents.

    Returns
    -------
    tuple[list[str], list[list[str]]]
        Header fields and the non-blank data rows. Both are empty for empty
        input.
    """
    lines = split_lines(text)
    if not lines:
        return [], []

    delimiter = detect_delimiter(lines[0])
    header = split_row(lines[0], delimiter)
    rows = [split_row(line, delimiter) for line in lines[1:] if line.strip()]

    logger.debug(
        "Parsed %d data rows with %d columns (delimiter=%r)", len(rows), len(header), delimiter
    )
    return header, rows


def parse_delimited(text: str) -> list[dict[str, str]]:
    """Parse delimited text into records keyed by header name.

    Fields past the header's length are dropped and header columns missing
    from a row map to ``""``. Duplicate header names keep the last column.

    Examples
    --------
    >>> parse_delimited('Variable,Value\\nSite Name,"Acme, Ltd"\\n')
    [{'Variable': 'Site Name', 'Value': 'Acme, Ltd'}]

    Parameters
    ----------
    text
        Entire file contents.

    Returns
    -------
    list[dict[str, str]]
        One record per non-blank data row.
    """
    header, rows = parse_rows(text)
    records = []
    for row in rows:
        record = {}
        for index, name in enumerate(header):
            record[name] = row[index] if index < len(row) else ""
        records.append(record)
    return records


def _quote_field(value: str, delimiter: str) -> str:
    # A leading quote run is written as bare doubled pairs; an opening quote
    # followed by an escaped pair would read back as a literal quote instead
    rest = value.lstrip(QUOTE)
    prefix = QUOTE * 2 * (len(value) - len(rest))
    if any(char in rest for char in (delimiter, QUOTE, "\n", "\r")):
        return prefix + QUOTE + rest.replace(QUOTE, QUOTE * 2) + QUOTE
    return prefix + rest


def serialize_delimited(rows: Iterable[Sequence[str]], delimiter: str = ",") -> str:
    """Write rows as delimited text readable by :func:`parse_delimited`.

    Parameters
    ----------
    rows
        Header row followed by data rows.
    delimiter
        One of :data:`CANDIDATE_DELIMITERS`.

    Returns
    -------
    str
        Newline-terminated text.

    Raises
    ------
    ValueError
        If ``delimiter`` is not a supported candidate.
    """
    if delimiter not in CANDIDATE_DELIMITERS:
        msg = f"Unsupported delimiter: {delimiter!r}"
        raise ValueError(msg)

    lines = [delimiter.join(_quote_field(str(value), delimiter) for value in row) for row in rows]
    return "".join(f"{line}\n" for line in lines)
