"""tariff-report: energy savings report generation from spreadsheet exports.

The package reads a variable sheet and a yearly chart sheet exported as
delimited text, normalizes their values, derives tariff-band costs, and fills
the placeholders of an HTML template to produce one report per site.

Architecture
------------
* ``extractor``: Quote-aware delimited-text parsing with delimiter detection.
* ``sheets``: Variable-sheet record building and chart-sheet series parsing.
* ``transformer``: Key-driven display formatting and cost-band computation.
* ``writer``: Placeholder maps, template substitution, and file output.
* ``utils``: Scalar number parsing and en-GB number rendering.

Configuration
-------------
Input and output paths default to the ``data/``, ``templates/`` and
``output/`` trees but respect ``MAIN_CSV``, ``CHART_CSV``, ``TEMPLATE_PATH``,
``OUTPUT_DIR`` and ``LOGS_DIR`` overrides (optionally from a ``.env`` file).

Entrypoints
-----------
The runnable module is :mod:`tariff_report.main_report`, also installed as the
``tariff-report`` console script.

Examples
--------
Render the report using configured paths:

    >>> python -m tariff_report.main_report

Render explicit inputs into ``out/``:

    >>> python -m tariff_report.main_report --main-csv main.csv --chart-csv chart.csv \
    ...     --output-dir out
"""

__version__ = "0.1.0"
__all__ = ["__version__"]


# Public helper for introspection tools.
def get_version() -> str:
    """Return the current package version string.

    Returns
    -------
    str
        Semantic version identifier (e.g., ``"0.1.0"``).
    """
    return __version__


__all__.append("get_version")
