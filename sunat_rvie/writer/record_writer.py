"""Record writer for extracted sales documents.

Naming convention for per-period files:
- rvie_202401.json
- rvie_202401.csv

The JSON payload keeps the nested camelCase record shape; the CSV flattens it
with dotted column names (``cpe.type``, ``igv.taxAmount``).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pandas as pd

from sunat_rvie.config import get_output_config, get_output_dir, setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from sunat_rvie.models import Period, SalesDocument

logger = setup_logging(__name__)


def records_filename(period: Period, extension: str) -> str:
    """Return the file name for a period, e.g. ``rvie_202401.json``."""
    prefix = get_output_config().get("file_prefix", "rvie")
    return f"{prefix}_{period.compact}.{extension}"


def records_to_dicts(records: Sequence[SalesDocument]) -> list[dict[str, Any]]:
    """Convert records to their output dictionaries."""
    return [record.to_dict() for record in records]


def records_to_dataframe(records: Sequence[SalesDocument]) -> pd.DataFrame:
    """Flatten records into a DataFrame with dotted column names.

    Absent optional fields become ``NaN`` in their column.
    """
    if not records:
        return pd.DataFrame()
    return pd.json_normalize(records_to_dicts(records))


def save_records(
    records: Sequence[SalesDocument],
    period: Period,
    output_dir: Path | None = None,
) -> Path:
    """Save records as JSON.

    Parameters
    ----------
    records
        Normalized sales documents.
    period
        Period the records were extracted for.
    output_dir
        Custom output directory; defaults to ``DATA_DIR/processed``.

    Returns
    -------
    Path
        Location of the written JSON file.
    """
    save_dir = output_dir if output_dir is not None else get_output_dir()
    save_dir.mkdir(parents=True, exist_ok=True)
    filepath = save_dir / records_filename(period, "json")

    output = {
        "period": period.compact,
        "count": len(records),
        "records": records_to_dicts(records),
    }

    with filepath.open("w", encoding="utf-8") as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    logger.info("Saved %d records: %s", len(records), filepath)
    return filepath


def write_records_csv(
    records: Sequence[SalesDocument],
    period: Period,
    output_dir: Path | None = None,
) -> Path:
    """Write records to a flat CSV file.

    Returns
    -------
    Path
        Location of the written CSV file.
    """
    save_dir = output_dir if output_dir is not None else get_output_dir()
    save_dir.mkdir(parents=True, exist_ok=True)
    filepath = save_dir / records_filename(period, "csv")

    records_to_dataframe(records).to_csv(filepath, index=False, encoding="utf-8")

    logger.info("Saved records CSV: %s", filepath)
    return filepath


def load_records(filepath: Path) -> dict[str, Any]:
    """Load a JSON file written by :func:`save_records`.

    Raises
    ------
    FileNotFoundError
        If ``filepath`` does not exist.
    """
    if not filepath.exists():
        msg = f"Records file not found: {filepath}"
        raise FileNotFoundError(msg)

    with filepath.open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]
