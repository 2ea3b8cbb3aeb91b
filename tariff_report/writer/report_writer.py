"""Report writer for placeholder substitution and file output.

Placeholders are ``{{dotted.key}}`` literals in the HTML template. Scalar
tokens receive display strings from the formatter; chart tokens receive JSON
array literals that the template's chart script reads directly.

Output naming convention: the expanded MPAN (``1234567890123.html``), else the
site name (``Acme_Ltd.html``), else ``report.html``.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tariff_report.config import get_report_config, setup_logging
from tariff_report.sheets.variables import get_raw
from tariff_report.transformer.formatter import format_by_key, format_mpan

if TYPE_CHECKING:
    from pathlib import Path

    from tariff_report.sheets.chart import ChartSeries
    from tariff_report.transformer.cost_bands import CostBands

logger = setup_logging(__name__)


def placeholder(key: str) -> str:
    """Return the template token for ``key`` (``"mpan"`` -> ``"{{mpan}}"``)."""
    return f"{{{{{key}}}}}"


def _json_list(values: list[Any]) -> str:
    return json.dumps(values, ensure_ascii=False)


def build_placeholder_map(
    values: Mapping[str, Any],
    cost_bands: CostBands,
    chart: ChartSeries,
    config: dict[str, Any] | None = None,
) -> dict[str, str]:
    """Build the token -> replacement mapping for the report template.

    Parameters
    ----------
    values
        Nested record from the variable sheet.
    cost_bands
        Output of :func:`~tariff_report.transformer.cost_bands.compute_cost_bands`.
    chart
        Output of :func:`~tariff_report.sheets.chart.parse_chart_series`.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.

    Returns
    -------
    dict[str, str]
        Replacement text per placeholder token.
    """
    report_config = get_report_config(config)
    mapping: dict[str, str] = {}

    for key in report_config.get("flat_keys", []):
        mapping[placeholder(key)] = format_by_key(key, get_raw(values, key))

    # Cost-band chart and table
    mapping[placeholder("costBands.labels")] = _json_list(cost_bands.labels)
    mapping[placeholder("costBands.current.values")] = _json_list(cost_bands.current_values)
    mapping[placeholder("costBands.optima.values")] = _json_list(cost_bands.optima_values)

    tariff_table = cost_bands.table["tariff"]
    cost_table = cost_bands.table["cost"]
    for band in (label.lower() for label in cost_bands.labels):
        for side in ("current", "optima"):
            mapping[placeholder(f"tariff.{side}.{band}")] = tariff_table[side].get(band, "")
            mapping[placeholder(f"cost.{side}.{band}")] = cost_table[side].get(band, "")

    # Yearly finance/purchase chart
    mapping[placeholder("chartYears")] = _json_list(chart.years)
    for token_key, series_names in report_config.get("chart_series_keys", {}).items():
        mapping[placeholder(f"chartSeries.{token_key}")] = _json_list(chart.get(*series_names))

    mapping[placeholder("static_disclaimer_text")] = report_config.get("disclaimer", "")
    mapping[placeholder("mpan")] = format_mpan(get_raw(values, "mpan"))

    logger.debug("Built %d placeholder replacements", len(mapping))
    return mapping


def apply_placeholders(template: str, mapping: Mapping[str, str | None]) -> str:
    """Replace every occurrence of each token with its text, in mapping order."""
    output = template
    for token, replacement in mapping.items():
        output = output.replace(token, replacement or "")
    return output


def sanitize_filename(name: str) -> str:
    """Reduce ``name`` to ``[A-Za-z0-9_]``, defaulting to ``"report"``."""
    cleaned = re.sub(r"[^a-z0-9]+", "_", name, flags=re.IGNORECASE).strip("_")
    return cleaned or "report"


def report_stem(values: Mapping[str, Any]) -> str:
    """Choose the output file stem from the MPAN, else the site name."""
    site_name = str(get_raw(values, "site_name") or "")
    return format_mpan(get_raw(values, "mpan")) or site_name or "report"


def write_report(html: str, stem: str, output_dir: Path) -> Path:
    """Write the rendered report as ``<sanitized stem>.html``.

    Parameters
    ----------
    html
        Rendered template.
    stem
        Unsanitized file stem (see :func:`report_stem`).
    output_dir
        Destination directory; created when missing.

    Returns
    -------
    Path
        Location of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"{sanitize_filename(stem)}.html"

    with filepath.open("w", encoding="utf-8") as f:
        f.write(html)

    logger.info("Report written to %s", filepath)
    return filepath


def write_series_csv(chart: ChartSeries, filepath: Path) -> Path:
    """Write the chart series table to CSV.

    Parameters
    ----------
    chart
        Parsed chart series.
    filepath
        Destination CSV path; its parent directory is created when missing.

    Returns
    -------
    Path
        Location of the written CSV file.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    df = chart.to_frame()
    df.to_csv(filepath, index=df.index.name is not None, encoding="utf-8")

    logger.info("Saved chart series CSV: %s", filepath)
    return filepath
