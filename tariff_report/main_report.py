#!/usr/bin/env python3
"""Report orchestrator - read sheets, build values, render and save the report.

This module orchestrates the complete report generation workflow:
1. Read the variable sheet, chart sheet, and HTML template
2. Build the nested value record from the variable sheet
3. Compute cost bands and parse the chart series for the site's MPAN
4. Substitute placeholders into the template
5. Write ``<MPAN>.html`` to the output directory

Usage (from project root):
    python -m tariff_report.main_report
    python -m tariff_report.main_report --main-csv data/main.csv --chart-csv data/chart.csv
    python -m tariff_report.main_report --output-dir out --series-csv out/series.csv --quiet

CLI Flags:
    --main-csv      Variable sheet (default: $MAIN_CSV)
    --chart-csv     Chart sheet (default: $CHART_CSV)
    --template      HTML template (default: $TEMPLATE_PATH)
    --output-dir    Output directory (default: $OUTPUT_DIR)
    --series-csv    Also export the chart series to this CSV path
    --quiet         Don't print the output path
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tariff_report.config import get_input_paths, read_text, setup_logging
from tariff_report.extractor import parse_delimited
from tariff_report.sheets import (
    ChartSeries,
    RecordPathConflictError,
    build_value_map,
    get_raw,
    parse_chart_series,
)
from tariff_report.transformer import CostBands, compute_cost_bands, format_mpan
from tariff_report.writer import (
    apply_placeholders,
    build_placeholder_map,
    report_stem,
    write_report,
    write_series_csv,
)

logger = setup_logging(__name__)


@dataclass
class ReportResult:
    """Everything produced for one report run."""

    values: dict[str, Any]
    cost_bands: CostBands
    chart: ChartSeries
    placeholders: dict[str, str]
    html: str
    stem: str


def render_report(
    main_text: str,
    chart_text: str,
    template: str,
    config: dict[str, Any] | None = None,
) -> ReportResult:
    """Run the in-memory pipeline from input texts to rendered HTML.

    Parameters
    ----------
    main_text
        Variable sheet contents.
    chart_text
        Chart sheet contents.
    template
        HTML template containing ``{{...}}`` placeholders.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.

    Returns
    -------
    ReportResult
        Intermediate structures plus the rendered HTML and output file stem.
    """
    values = build_value_map(parse_delimited(main_text))
    mpan = format_mpan(get_raw(values, "mpan"))
    if not mpan:
        logger.warning("Variable sheet has no MPAN; chart rows will not be filtered")

    cost_bands = compute_cost_bands(values)
    chart = parse_chart_series(chart_text, mpan)
    placeholders = build_placeholder_map(values, cost_bands, chart, config)
    html = apply_placeholders(template, placeholders)

    return ReportResult(
        values=values,
        cost_bands=cost_bands,
        chart=chart,
        placeholders=placeholders,
        html=html,
        stem=report_stem(values),
    )


def generate_report(
    main_csv: Path,
    chart_csv: Path,
    template_path: Path,
    output_dir: Path,
    series_csv: Path | None = None,
) -> Path:
    """Read inputs from disk, render the report, and write it.

    Parameters
    ----------
    main_csv : Path
        Variable sheet path.
    chart_csv : Path
        Chart sheet path.
    template_path : Path
        HTML template path.
    output_dir : Path
        Directory that receives ``<stem>.html``.
    series_csv : Path, optional
        When given, also export the chart series to this CSV.

    Returns
    -------
    Path
        Location of the written report.

    Raises
    ------
    FileNotFoundError
        If any input file is missing.
    """
    # All inputs are read before any parsing starts
    template = read_text(template_path)
    main_text = read_text(main_csv)
    chart_text = read_text(chart_csv)

    result = render_report(main_text, chart_text, template)
    logger.info(
        "Rendered report for %s (%d placeholders, %d chart periods)",
        result.stem,
        len(result.placeholders),
        len(result.chart.years),
    )

    if series_csv is not None:
        write_series_csv(result.chart, series_csv)

    return write_report(result.html, result.stem, output_dir)


# =============================================================================
# CLI
# =============================================================================


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    defaults = get_input_paths()
    parser = argparse.ArgumentParser(
        description="Generate an energy savings report from exported CSV sheets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tariff_report.main_report
  python -m tariff_report.main_report --main-csv main.csv --chart-csv chart.csv
  python -m tariff_report.main_report --output-dir out --series-csv out/series.csv
        """,
    )
    parser.add_argument(
        "--main-csv", type=Path, default=defaults["main_csv"], help="Variable sheet CSV"
    )
    parser.add_argument(
        "--chart-csv", type=Path, default=defaults["chart_csv"], help="Chart sheet CSV"
    )
    parser.add_argument("--template", type=Path, default=defaults["template"], help="HTML template")
    parser.add_argument(
        "--output-dir", type=Path, default=defaults["output_dir"], help="Directory for the report"
    )
    parser.add_argument("--series-csv", type=Path, default=None, help="Export chart series to CSV")
    parser.add_argument("--quiet", action="store_true", help="Don't print the output path")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Parse CLI flags and generate the report.

    Returns
    -------
    int
        ``0`` when the report was written; ``1`` when an input could not be
        read.
    """
    args = _parse_args(argv)

    try:
        output_path = generate_report(
            main_csv=args.main_csv,
            chart_csv=args.chart_csv,
            template_path=args.template,
            output_dir=args.output_dir,
            series_csv=args.series_csv,
        )
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Generation failed: %s", err)
        return 1
    except RecordPathConflictError as err:
        logger.error("Variable sheet has conflicting keys: %s", err)
        return 1

    if not args.quiet:
        print(f"Report written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
