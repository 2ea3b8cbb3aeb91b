"""Writer module for report and CSV output.

Report naming convention: <MPAN>.html (falling back to the site name)
Chart export: chart series as CSV with one row per year
"""

from tariff_report.writer.report_writer import (
    apply_placeholders,
    build_placeholder_map,
    placeholder,
    report_stem,
    sanitize_filename,
    write_report,
    write_series_csv,
)

__all__ = [
    # Placeholder substitution
    "apply_placeholders",
    "build_placeholder_map",
    "placeholder",
    # Output files
    "report_stem",
    "sanitize_filename",
    "write_report",
    "write_series_csv",
]
