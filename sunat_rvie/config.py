"""Configuration management for sunat-rvie.

This module centralizes file-system paths, environment variables, and the
portal configuration loader used by the navigator and the CLI.

Configuration file
------------------
* ``config/config.json``: portal selectors, wait budgets (milliseconds), and
  output naming.

Environment variables
---------------------
``DATA_DIR`` and ``LOGS_DIR`` override default directories.
``SUNAT_STORAGE_STATE`` points at a Playwright storage-state file holding an
already-authenticated SOL session, ``SUNAT_START_URL`` is the menu page opened
before navigation, and ``SUNAT_HEADLESS`` (``"0"``/``"false"``) shows the
browser window. Directories are created eagerly on import so downstream
callers can rely on their existence.
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
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Session settings
SUNAT_STORAGE_STATE = os.getenv("SUNAT_STORAGE_STATE", "")
SUNAT_START_URL = os.getenv("SUNAT_START_URL", "")
SUNAT_HEADLESS = os.getenv("SUNAT_HEADLESS", "1").strip().lower() not in {"0", "false", "no"}

# Local currency; its exchange rate is always 1
LOCAL_CURRENCY = "PEN"

# Source table date format (DD/MM/YYYY) and output format
SOURCE_DATE_FORMAT = "%d/%m/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"


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

    with Path(config_path).open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def get_portal_config() -> dict[str, Any]:
    """Return the ``portal`` section with selectors and wait budgets.

    Returns
    -------
    dict[str, Any]
        Mapping with ``selectors``, ``timeouts`` (milliseconds), and
        ``frame_settle_ms``.

    Raises
    ------
    KeyError
        If the configuration has no ``portal`` section.
    """
    return cast("dict[str, Any]", get_config()["portal"])


def get_output_config() -> dict[str, Any]:
    """Return output naming settings, defaulting to the ``rvie`` prefix."""
    return cast("dict[str, Any]", get_config().get("output", {"file_prefix": "rvie"}))


def get_output_dir() -> Path:
    """Return the directory where extracted records are written."""
    return DATA_DIR / "processed"


def setup_logging(name: str = "sunat_rvie") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level daily file
        handler under ``LOGS_DIR``.
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
        file_handler = logging.FileHandler(LOGS_DIR / log_filename)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
