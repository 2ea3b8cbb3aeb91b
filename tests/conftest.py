"""Pytest configuration for tariff_report tests.

This module provides:
- Sample variable and chart sheets shaped like the real exports
- A minimal template and report config so writer tests stay off disk
"""

from __future__ import annotations

from typing import Any

import pytest

MPAN_SCIENTIFIC = "1.234567890123E+12"
MPAN_DIGITS = "1234567890123"


@pytest.fixture
def variable_sheet_text() -> str:
    """Comma-delimited variable sheet with quoting, newlines, and blanks."""
    return (
        "Variable,Value\r\n"
        'Site Name,"Acme Foods, Ltd"\r\n'
        'Address,"1 High St\r\nLeeds"\r\n'
        f"MPAN,{MPAN_SCIENTIFIC}\r\n"
        'Total Consumption,"1,250,000"\r\n'
        'Current Energy Bill £,"185,000.40"\r\n'
        "Savings,12.345\r\n"
        "Capital Cost Value,-1500\r\n"
        "Dynamic ROI inc. Full Expensing,3.26\r\n"
        "Day Current P/kWh,20\r\n"
        "Day units Current kWh,1000\r\n"
        "Night Current P/kWh,12.5\r\n"
        "Night units Current kWh,400\r\n"
        "Peak Current P/kWh,30\r\n"
        "Red units Current kWh,100\r\n"
        "Amber units Current kWh,50\r\n"
        "Day Optima P/kWh,18\r\n"
        "Day units Optima kWh,1000\r\n"
        "\r\n"
        ",orphan value\r\n"
        "Basic ROI (years) *,6.04\r\n"
    )


@pytest.fixture
def chart_sheet_text() -> str:
    """Semicolon-delimited chart sheet covering two MPANs."""
    return (
        "Year;MPAN;Finance Payment;Finance Optima Cum Savings;Purchase Optima Cum Savings\n"
        f"2025;{MPAN_SCIENTIFIC};-1,200.5;500;600\n"
        f"2026;{MPAN_DIGITS};2.345678;-;n/a\n"
        "2025;9999999999999;1;2;3\n"
    )


@pytest.fixture
def template_text() -> str:
    """Small template exercising scalar, table, and chart placeholders."""
    return (
        "<h1>{{site_name}}</h1>\n"
        "<p>{{mpan}} | {{capital_cost_gbp}} | {{savings_percent}}</p>\n"
        "<td>{{tariff.current.day}}</td><td>{{cost.current.day}}</td>\n"
        "<script>const years = {{chartYears}}; "
        "const pay = {{chartSeries.finance_payment}};</script>\n"
        "<footer>{{static_disclaimer_text}}</footer>\n"
    )


@pytest.fixture
def report_config() -> dict[str, Any]:
    """Create a mock config for testing."""
    return {
        "report": {
            "flat_keys": [
                "site_name",
                "mpan",
                "capital_cost_gbp",
                "savings_percent",
                "units.current.day_kwh",
                "tariff.current.day_p_kwh",
                "finance.product",
            ],
            "chart_series_keys": {
                "finance_payment": ["finance_payment", "finance_payment_gbp"],
                "finance_dynamic_forecast_savings": ["finance_dynamic_forecast_savings"],
            },
            "disclaimer": "Savings are indicative.",
        },
    }
