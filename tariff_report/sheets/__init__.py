"""Sheet extraction modules for tariff-report.

This package contains the per-input-sheet logic. Each sheet corresponds to
one exported CSV consumed by the report.

Modules
-------
variables
    Technical and Financial Output (``Variable`` / ``Value`` pairs).
    Folds rows into a nested record keyed by dotted paths.

chart
    Outputs - Chart Financed (one row per MPAN and year).
    Filters rows to the report's MPAN and builds period-aligned series.

Notes
-----
``variables`` is imported first; ``chart`` depends on the transformer
package, which in turn reads records through ``variables.get_raw``.
"""

from tariff_report.sheets.variables import (
    VARIABLE_TO_KEY,
    RecordPathConflictError,
    build_value_map,
    get_raw,
    normalise_key,
    resolve_key,
)

from tariff_report.sheets.chart import ChartSeries, parse_chart_series, series_key

__all__ = [
    # Chart sheet
    "ChartSeries",
    "parse_chart_series",
    "series_key",
    # Variable sheet
    "VARIABLE_TO_KEY",
    "RecordPathConflictError",
    "build_value_map",
    "get_raw",
    "normalise_key",
    "resolve_key",
]
