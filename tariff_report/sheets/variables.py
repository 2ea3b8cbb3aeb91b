"""Variable sheet - key/value record extraction module.

The variable sheet ("Technical and Financial Output") is a two-column export
of ``Variable`` / ``Value`` pairs. This module folds those rows into a nested
record keyed by dotted paths such as ``tariff.current.day_p_kwh``.

Key Constants:
    VARIABLE_TO_KEY: Read-only mapping of known sheet labels to dotted paths.

Key Functions:
    normalise_key(): Slug fallback for labels missing from VARIABLE_TO_KEY.
    resolve_key(): Dotted path for a sheet label.
    build_value_map(): Build the nested record from parsed rows.
    get_raw(): Look up a dotted path without raising.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

# Sheet labels -> dotted keys used by the report placeholders
VARIABLE_TO_KEY: Mapping[str, str] = MappingProxyType(
    {
        "Site Name": "site_name",
        "Address": "address",
        "MPAN": "mpan",
        "Current Demand Period": "current_demand_period",
        "Number of Days": "number_of_days",
        "Created Date": "created_date",
        "Contract End Date": "contract_end_date",
        "Current Supplier": "current_supplier",
        "GSP": "gsp",
        "Total Consumption": "total_consumption_kwh",
        "Current Energy Bill £": "current_energy_bill_gbp",
        "Optima Energy Bill £": "optima_energy_bill_gbp",
        "Savings": "savings_percent",
        "Optima System Type": "optima_system_type",
        "Power": "optima_power_kw",
        "Capacity": "optima_capacity_kwh",
        "Capital Cost Value": "capital_cost_gbp",
        "Optima Annual Savings": "optima_annual_savings_gbp",
        "Dynamic Savings": "dynamic_savings_percent",
        "Dynamic Forecast Savings *": "dynamic_forecast_savings_gbp",
        "Dynamic ROI inc. Full Expensing": "dynamic_roi_inc_full_expensing_years",
        "Day units Current kWh": "units.current.day_kwh",
        "Night units Current kWh": "units.current.night_kwh",
        "Red units Current kWh": "units.current.red_kwh",
        "Amber units Current kWh": "units.current.amber_kwh",
        "Green units Current kWh": "units.current.green_kwh",
        "Capacity Current KVA": "capacity.current_kva",
        "Day units Optima kWh": "units.optima.day_kwh",
        "Night units Optima kWh": "units.optima.night_kwh",
        "Red units Optima kWh": "units.optima.red_kwh",
        "Amber units Optima kWh": "units.optima.amber_kwh",
        "Green units Optima kWh": "units.optima.green_kwh",
        "Capacity Optima KVA": "capacity.optima_kva",
        "Day Current P/kWh": "tariff.current.day_p_kwh",
        "Night Current P/kWh": "tariff.current.night_p_kwh",
        "Peak Current P/kWh": "tariff.current.peak_p_kwh",
        "Standing charge Current P/D": "tariff.current.standing_p_day",
        "Availability Current P/KVA/D": "tariff.current.availability_p_kva_day",
        "CCL Current P/kWh": "tariff.current.ccl_p_kwh",
        "Day Optima P/kWh": "tariff.optima.day_p_kwh",
        "Night Optima P/kWh": "tariff.optima.night_p_kwh",
        "Peak Optima P/kWh": "tariff.optima.peak_p_kwh",
        "Standing charge Optima P/D": "tariff.optima.standing_p_day",
        "Availability Optima P/KVA/D": "tariff.optima.availability_p_kva_day",
        "CCL Optima P/kWh": "tariff.optima.ccl_p_kwh",
        "Product": "finance.product",
        "Term (months)": "finance.term_months",
        "Interest Rate": "finance.interest_rate",
        "Repayment (p/m)": "finance.repayment_gbp_pm",
        "Deposit": "finance.deposit_gbp",
        "VAT": "finance.vat_gbp",
        "Est. Price (inc. install)": "finance.est_price_gbp",
        "Purchase - Savings Year 1": "purchase_savings_year_1",
        "Purchase - Savings within Warranty": "purchase_savings_warranty",
        "Purchase - Savings within Useful Life": "purchase_savings_useful_life",
        "Purchase - ROI ex. Full Expensing": "purchase_roi_ex_full_expensing",
        "Purchase - ROI inc. Full Expensing": "purchase_roi_inc_full_expensing",
        "Basic ROI (years) *": "basic_roi_years",
        "Full Expensing": "full_expensing_value",
        "Finance - Savings Year 1": "finance_savings_year_1",
        "Finance - Savings within Warranty": "finance_savings_warranty",
        "Finance - Savings within Useful Life": "finance_savings_useful_life",
        "Finance - ROI ex. Full Expensing": "finance_roi_ex_full_expensing",
        "Finance - ROI inc. Full Expensing": "finance_roi_inc_full_expensing",
        "Dynamic ROI ex. Full Expensing": "dynamic_roi_ex_full_expensing",
    },
)

# Applied in order by normalise_key
_SLUG_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*"), ""),
    (re.compile(r"£"), ""),
    (re.compile(r"\([^)]*\)"), ""),
    (re.compile(r"[^a-z0-9]+"), "_"),
    (re.compile(r"_+"), "_"),
    (re.compile(r"^_|_$"), ""),
)

_VARIABLE_COLUMNS = ("Variable", "variable", "VARIABLE")
_VALUE_COLUMNS = ("Value", "value", "VALUE")


class RecordPathConflictError(ValueError):
    """Raised when a dotted path collides with an existing leaf or branch."""


def normalise_key(label: str) -> str:
    """Slugify a sheet label into a record key.

    Examples
    --------
    - "Dynamic Forecast Savings *" -> "dynamic_forecast_savings"
    - "Repayment (p/m)" -> "repayment"
    - "Current Energy Bill £" -> "current_energy_bill"

    Parameters
    ----------
    label
        Raw variable name from the sheet.

    Returns
    -------
    str
        Lowercase, underscore-separated key with no leading/trailing
        underscores.
    """
    key = label.lower()
    for pattern, replacement in _SLUG_RULES:
        key = pattern.sub(replacement, key)
    return key


def resolve_key(label: str) -> str:
    """Return the dotted path for a sheet label, falling back to its slug."""
    return VARIABLE_TO_KEY.get(label) or normalise_key(label)


def _first_present(row: Mapping[str, Any], columns: tuple[str, ...]) -> Any:
    for column in columns:
        value = row.get(column)
        if value:
            return value
    return None


def _set_path(tree: dict[str, Any], path: str, value: Any) -> None:
    """Ensure intermediate branches for ``path`` exist, then set the leaf.

    Raises
    ------
    RecordPathConflictError
        If a branch segment is already a leaf, or the leaf is already a
        branch.
    """
    *branches, leaf = path.split(".")
    cursor = tree
    for depth, part in enumerate(branches):
        node = cursor.setdefault(part, {})
        if not isinstance(node, dict):
            prefix = ".".join(branches[: depth + 1])
            msg = f"Cannot set '{path}': '{prefix}' already holds a value"
            raise RecordPathConflictError(msg)
        cursor = node

    if isinstance(cursor.get(leaf), dict):
        msg = f"Cannot set '{path}': it already holds nested keys"
        raise RecordPathConflictError(msg)
    cursor[leaf] = value


def build_value_map(records: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Fold variable-sheet rows into a nested record.

    Rows with an empty variable name are skipped; later rows overwrite
    earlier ones for the same key.

    Parameters
    ----------
    records
        Parsed rows carrying ``Variable`` and ``Value`` columns (any of the
        common capitalizations).

    Returns
    -------
    dict[str, Any]
        Nested mapping whose leaves are the raw string values.

    Raises
    ------
    RecordPathConflictError
        If two labels resolve to a leaf and a branch at the same path.
    """
    values: dict[str, Any] = {}
    skipped = 0

    for row in records:
        label = str(_first_present(row, _VARIABLE_COLUMNS) or "").strip()
        if not label:
            skipped += 1
            continue

        value = _first_present(row, _VALUE_COLUMNS)
        _set_path(values, resolve_key(label), "" if value is None else value)

    logger.debug("Built value map with %d top-level keys (%d rows skipped)", len(values), skipped)
    return values


def get_raw(values: Mapping[str, Any], dotted_path: str) -> Any:
    """Look up a dotted path in the record.

    Parameters
    ----------
    values
        Record produced by :func:`build_value_map`.
    dotted_path
        Path such as ``"tariff.current.day_p_kwh"``.

    Returns
    -------
    Any
        The stored value, or ``""`` when any segment is missing.
    """
    cursor: Any = values
    for part in dotted_path.split("."):
        if isinstance(cursor, Mapping) and part in cursor:
            cursor = cursor[part]
        else:
            return ""
    return cursor
