"""Chart sheet - yearly finance/purchase series extraction module.

The chart sheet ("Outputs - Chart Financed") holds one row per site and year
with numeric series columns. Rows are filtered to the report's MPAN and each
value column becomes a period-aligned list where unparseable cells are
``None`` gaps.

Key Classes:
    ChartSeries: Years plus named series, convertible to a DataFrame.

Key Functions:
    parse_chart_series(): Parse, filter, and coerce the chart sheet.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

import pandas as pd

from tariff_report.extractor.delimited import parse_delimited
from tariff_report.transformer.formatter import format_mpan
from tariff_report.utils.parsing import round_to, to_number

logger = logging.getLogger(__name__)

PERIOD_COLUMNS = ("Year", "year")
MPAN_COLUMNS = ("MPAN", "mpan")
_NON_SERIES_COLUMNS = frozenset(PERIOD_COLUMNS + MPAN_COLUMNS)


@dataclass
class ChartSeries:
    """Period labels and period-aligned numeric series.

    Attributes
    ----------
        years: Period labels in row order (rows without a label are omitted).
        series: Slugified column name -> one value per retained row, ``None``
            where the cell was blank or not numeric.
    """

    years: list[str] = field(default_factory=list)
    series: dict[str, list[float | None]] = field(default_factory=dict)

    def get(self, *names: str) -> list[float | None]:
        """Return the first series present under any of ``names``, else ``[]``."""
        for name in names:
            if name in self.series:
                return self.series[name]
        return []

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame with one row per retained period.

        Gaps become ``NaN``. The index holds the period labels when every row
        has one, otherwise a default range index.
        """
        df = pd.DataFrame(self.series, dtype="float64")
        if len(self.years) == len(df):
            df.index = pd.Index(self.years, name="year")
        return df


def series_key(header: str) -> str:
    """Slugify a chart column header (``"Finance Payment £"`` -> ``"finance_payment"``)."""
    key = re.sub(r"[^a-z0-9]+", "_", header.lower())
    return re.sub(r"_+", "_", key).strip("_")


def _first_value(row: dict[str, str], columns: tuple[str, ...]) -> str:
    for column in columns:
        if row.get(column):
            return row[column]
    return ""


def _coerce_cell(value: str | None) -> float | None:
    cleaned = (value or "").strip()
    if cleaned in {"", "-"}:
        return None
    number = to_number(cleaned)
    return None if number is None else round_to(number)


def parse_chart_series(text: str, target_mpan: str | None = None) -> ChartSeries:
    """Parse the chart sheet into period-aligned series.

    Parameters
    ----------
    text
        Raw chart sheet contents.
    target_mpan
        MPAN to keep; compared after scientific-notation expansion on both
        sides. All rows are kept when empty or ``None``.

    Returns
    -------
    ChartSeries
        Years and series for the retained rows; empty when no row matches.
    """
    rows = parse_delimited(text)
    if target_mpan:
        target = format_mpan(target_mpan)
        rows = [row for row in rows if format_mpan(_first_value(row, MPAN_COLUMNS)) == target]

    if not rows:
        logger.warning("No chart rows matched MPAN %s", target_mpan or "(any)")
        return ChartSeries()

    # Headers that slugify alike share a key; the last one wins
    columns = {
        series_key(header): header for header in rows[0] if header not in _NON_SERIES_COLUMNS
    }
    chart = ChartSeries(
        years=[year for year in (_first_value(row, PERIOD_COLUMNS) for row in rows) if year],
        series={key: [] for key in columns},
    )

    for row in rows:
        for key, header in columns.items():
            chart.series[key].append(_coerce_cell(row.get(header)))

    logger.debug("Parsed %d chart periods across %d series", len(rows), len(chart.series))
    return chart
