"""Configuration management for tariff-report.

This module centralizes input/output paths, environment variables, logging,
and the JSON report configuration used by the generation pipeline.

Configuration files
-------------------
* ``config.json``: report layout (flat placeholder keys, chart series keys,
  static disclaimer text)

Environment variables
---------------------
``MAIN_CSV`` and ``CHART_CSV`` point at the variable and chart sheets,
``TEMPLATE_PATH`` at the HTML template, ``OUTPUT_DIR`` at the report
destination and ``LOGS_DIR`` at the run-log directory. The log directory is
created eagerly on import so file logging can start immediately.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
MAIN_CSV = Path(os.getenv("MAIN_CSV", DATA_DIR / "Technical and Financial Output.csv"))
CHART_CSV = Path(os.getenv("CHART_CSV", DATA_DIR / "Outputs - Chart Financed.csv"))
TEMPLATE_PATH = Path(os.getenv("TEMPLATE_PATH", PROJECT_ROOT / "templates" / "report.html"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", PROJECT_ROOT / "output"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

LOGS_DIR.mkdir(parents=True, exist_ok=True)


def get_config() -> dict[str, Any]:
    """Load the primary project configuration.

    Returns
    -------
    dict[str, Any]
        Parsed contents of ``config/config.json``.

    Raises
    ------
    FileNotFoundError
        If ``config/config.json`` is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    config_path = CONFIG_DIR / "config.json"
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def get_report_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the ``report`` section of the project configuration.

    Parameters
    ----------
    config : dict[str, Any], optional
        Preloaded configuration; loaded from disk when ``None``.

    Returns
    -------
    dict[str, Any]
        Mapping with ``flat_keys``, ``chart_series_keys`` and ``disclaimer``.
    """
    if config is None:
        config = get_config()
    return cast("dict[str, Any]", config.get("report", {}))


def get_input_paths() -> dict[str, Path]:
    """Return the configured input and output locations.

    Returns
    -------
    dict[str, Path]
        Mapping with keys ``main_csv``, ``chart_csv``, ``template`` and
        ``output_dir``.
    """
    return {
        "main_csv": MAIN_CSV,
        "chart_csv": CHART_CSV,
        "template": TEMPLATE_PATH,
        "output_dir": OUTPUT_DIR,
    }


def setup_logging(name: str = "tariff_report") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level file handler
        under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_run.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def read_text(path: Path) -> str:
    """Read a UTF-8 input file in full.

    Parameters
    ----------
    path : Path
        File to read.

    Returns
    -------
    str
        Entire file contents with line endings as written.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    if not path.exists():
        msg = f"Input file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open(encoding="utf-8", newline="") as f:
        return f.read()
