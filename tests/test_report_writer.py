"""Tests for placeholder building, substitution, and file output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tariff_report.extractor.delimited import parse_delimited
from tariff_report.sheets.chart import ChartSeries, parse_chart_series
from tariff_report.sheets.variables import build_value_map
from tariff_report.transformer.cost_bands import compute_cost_bands
from tariff_report.writer.report_writer import (
    apply_placeholders,
    build_placeholder_map,
    placeholder,
    report_stem,
    sanitize_filename,
    write_report,
    write_series_csv,
)


@pytest.fixture
def placeholders(
    variable_sheet_text: str, chart_sheet_text: str, report_config: dict[str, Any]
) -> dict[str, str]:
    """Placeholder map built from the sample sheets and mock config."""
    values = build_value_map(parse_delimited(variable_sheet_text))
    chart = parse_chart_series(chart_sheet_text, "1234567890123")
    return build_placeholder_map(values, compute_cost_bands(values), chart, report_config)


class TestPlaceholder:
    """Tests for placeholder token construction."""

    def test_token(self) -> None:
        """Keys are wrapped in double braces."""
        assert placeholder("mpan") == "{{mpan}}"
        assert placeholder("tariff.current.day") == "{{tariff.current.day}}"


class TestBuildPlaceholderMap:
    """Tests for build_placeholder_map."""

    def test_flat_keys_formatted(self, placeholders: dict[str, str]) -> None:
        """Configured flat keys receive formatted display strings."""
        assert placeholders["{{site_name}}"] == "Acme Foods, Ltd"
        assert placeholders["{{capital_cost_gbp}}"] == "(£1,500)"
        assert placeholders["{{savings_percent}}"] == "12.3%"
        assert placeholders["{{units.current.day_kwh}}"] == "1,000 kWh"
        assert placeholders["{{tariff.current.day_p_kwh}}"] == "20 p/kWh"

    def test_missing_flat_key_is_empty(self, placeholders: dict[str, str]) -> None:
        """Flat keys absent from the sheet render empty."""
        assert placeholders["{{finance.product}}"] == ""

    def test_mpan_expanded(self, placeholders: dict[str, str]) -> None:
        """The MPAN placeholder always carries plain digits."""
        assert placeholders["{{mpan}}"] == "1234567890123"

    def test_cost_band_arrays(self, placeholders: dict[str, str]) -> None:
        """Cost-band chart placeholders are JSON arrays."""
        labels = json.loads(placeholders["{{costBands.labels}}"])
        current = json.loads(placeholders["{{costBands.current.values}}"])
        optima = json.loads(placeholders["{{costBands.optima.values}}"])

        assert labels == ["Day", "Night", "Red", "Amber", "Green"]
        assert current == [200.0, 50.0, 30.0, 0.0, 0.0]
        assert optima == [180.0, 0.0, 0.0, 0.0, 0.0]

    def test_cost_band_table(self, placeholders: dict[str, str]) -> None:
        """Every band has rate and cost cells for both tariffs."""
        for band in ("day", "night", "red", "amber", "green"):
            for side in ("current", "optima"):
                assert f"{{{{tariff.{side}.{band}}}}}" in placeholders
                assert f"{{{{cost.{side}.{band}}}}}" in placeholders

        assert placeholders["{{tariff.current.day}}"] == "20 p/kWh"
        assert placeholders["{{cost.current.day}}"] == "£200"
        assert placeholders["{{cost.current.amber}}"] == ""

    def test_chart_arrays(self, placeholders: dict[str, str]) -> None:
        """Chart series are JSON arrays with null gaps; missing series are empty."""
        assert json.loads(placeholders["{{chartYears}}"]) == ["2025", "2026"]
        assert json.loads(placeholders["{{chartSeries.finance_payment}}"]) == [-1200.5, 2.35]
        assert placeholders["{{chartSeries.finance_dynamic_forecast_savings}}"] == "[]"

    def test_chart_alias(self, report_config: dict[str, Any]) -> None:
        """finance_payment falls back to the finance_payment_gbp series."""
        chart = ChartSeries(years=["2025"], series={"finance_payment_gbp": [None]})
        mapping = build_placeholder_map({}, compute_cost_bands({}), chart, report_config)

        assert mapping["{{chartSeries.finance_payment}}"] == "[null]"

    def test_disclaimer(self, placeholders: dict[str, str]) -> None:
        """The static disclaimer comes from config."""
        assert placeholders["{{static_disclaimer_text}}"] == "Savings are indicative."


class TestApplyPlaceholders:
    """Tests for apply_placeholders."""

    def test_replaces_every_occurrence(self) -> None:
        """All occurrences of a token are replaced."""
        out = apply_placeholders("{{a}} and {{a}} {{b}}", {"{{a}}": "x", "{{b}}": "y"})
        assert out == "x and x y"

    def test_none_becomes_empty(self) -> None:
        """A None replacement removes the token."""
        assert apply_placeholders("[{{a}}]", {"{{a}}": None}) == "[]"

    def test_unknown_tokens_left_alone(self) -> None:
        """Tokens missing from the mapping are untouched."""
        assert apply_placeholders("{{other}}", {"{{a}}": "x"}) == "{{other}}"

    def test_renders_template(self, template_text: str, placeholders: dict[str, str]) -> None:
        """The sample template is fully substituted."""
        html = apply_placeholders(template_text, placeholders)

        assert "{{" not in html
        assert "<h1>Acme Foods, Ltd</h1>" in html
        assert "1234567890123 | (£1,500) | 12.3%" in html
        assert "const pay = [-1200.5, 2.35];" in html


class TestFileOutput:
    """Tests for file naming and writing."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("1234567890123", "1234567890123"),
            ("Acme Foods, Ltd", "Acme_Foods_Ltd"),
            ("  --Site #4--  ", "Site_4"),
            ("***", "report"),
            ("", "report"),
        ],
    )
    def test_sanitize_filename(self, name: str, expected: str) -> None:
        """Names reduce to safe file stems."""
        assert sanitize_filename(name) == expected

    def test_report_stem(self) -> None:
        """The stem prefers the MPAN, then the site name."""
        assert report_stem({"mpan": "1.1E+9", "site_name": "Acme"}) == "1100000000"
        assert report_stem({"site_name": "Acme"}) == "Acme"
        assert report_stem({}) == "report"

    def test_write_report(self, tmp_path: Path) -> None:
        """Reports are written under a created output directory."""
        output_dir = tmp_path / "nested" / "output"
        path = write_report("<p>ok</p>", "Acme Foods, Ltd", output_dir)

        assert path == output_dir / "Acme_Foods_Ltd.html"
        assert path.read_text(encoding="utf-8") == "<p>ok</p>"

    def test_write_series_csv(self, tmp_path: Path, chart_sheet_text: str) -> None:
        """Chart series export as CSV with one row per year."""
        chart = parse_chart_series(chart_sheet_text, "1234567890123")
        path = write_series_csv(chart, tmp_path / "series.csv")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == (
            "year,finance_payment,finance_optima_cum_savings,purchase_optima_cum_savings"
        )
        assert lines[1] == "2025,-1200.5,500.0,600.0"
        assert lines[2] == "2026,2.35,,"
