"""Tariff-band cost breakdown.

Each of the five consumption bands is costed for the current tariff and the
Optima (alternative) tariff as ``units (kWh) x rate (p/kWh) / 100``. Missing
inputs count as zero so an absent band contributes no cost.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tariff_report.sheets.variables import get_raw
from tariff_report.transformer.formatter import format_currency
from tariff_report.utils.parsing import format_plain, round_to, to_number

SIDES = ("current", "optima")


@dataclass(frozen=True)
class BandSpec:
    """Record paths feeding one cost band."""

    label: str
    rate_keys: tuple[str, ...]
    units_key: str

    @property
    def key(self) -> str:
        return self.label.lower()


# Amber reads red_p_kwh when no amber rate is present in the sheet
BANDS: tuple[BandSpec, ...] = (
    BandSpec("Day", ("day_p_kwh",), "day_kwh"),
    BandSpec("Night", ("night_p_kwh",), "night_kwh"),
    BandSpec("Red", ("peak_p_kwh",), "red_kwh"),
    BandSpec("Amber", ("amber_p_kwh", "red_p_kwh"), "amber_kwh"),
    BandSpec("Green", ("green_p_kwh",), "green_kwh"),
)


@dataclass
class CostBands:
    """Cost-band table for the current and Optima tariffs.

    Attributes
    ----------
        labels: Band labels in display order.
        current_values: Current-tariff cost per band, pounds to 2 dp.
        optima_values: Optima-tariff cost per band, pounds to 2 dp.
        rates: ``{side: {band: rate}}`` in p/kWh (0 when missing).
        units: ``{side: {band: units}}`` in kWh (0 when missing).
        table: ``{"tariff"|"cost": {side: {band: display string}}}``.
    """

    labels: list[str] = field(default_factory=list)
    current_values: list[float] = field(default_factory=list)
    optima_values: list[float] = field(default_factory=list)
    rates: dict[str, dict[str, float]] = field(default_factory=dict)
    units: dict[str, dict[str, float]] = field(default_factory=dict)
    table: dict[str, dict[str, dict[str, str]]] = field(default_factory=dict)

    def values_for(self, side: str) -> list[float]:
        """Return the per-band costs for ``"current"`` or ``"optima"``."""
        return self.current_values if side == "current" else self.optima_values


def _read_rate(values: Mapping[str, Any], side: str, band: BandSpec) -> float:
    raw: Any = ""
    for rate_key in band.rate_keys:
        raw = get_raw(values, f"tariff.{side}.{rate_key}")
        if raw:
            break
    return to_number(raw) or 0.0


def _read_units(values: Mapping[str, Any], side: str, band: BandSpec) -> float:
    return to_number(get_raw(values, f"units.{side}.{band.units_key}")) or 0.0


def compute_cost_bands(values: Mapping[str, Any]) -> CostBands:
    """Compute per-band costs from the variable-sheet record.

    Parameters
    ----------
    values
        Nested record from :func:`~tariff_report.sheets.variables.build_value_map`.

    Returns
    -------
    CostBands
        Costs per band plus a display table of rates (``"20 p/kWh"``) and
        costs (``"£200"``); zero rates and costs display as ``""``.
    """
    result = CostBands(labels=[band.label for band in BANDS])
    result.table = {"tariff": {side: {} for side in SIDES}, "cost": {side: {} for side in SIDES}}

    for side in SIDES:
        result.rates[side] = {}
        result.units[side] = {}
        costs = result.values_for(side)

        for band in BANDS:
            rate = _read_rate(values, side, band)
            units = _read_units(values, side, band)
            cost = round_to(units * rate / 100)

            result.rates[side][band.key] = rate
            result.units[side][band.key] = units
            costs.append(cost)
            result.table["tariff"][side][band.key] = f"{format_plain(rate)} p/kWh" if rate else ""
            result.table["cost"][side][band.key] = format_currency(cost) if cost else ""

    return result
