"""Parsing helpers for SUNAT register cells.

Cells arrive as raw text scraped from the report table. None of these helpers
raise on bad data: unusable input becomes ``None``.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from sunat_rvie.config import ISO_DATE_FORMAT, LOCAL_CURRENCY, SOURCE_DATE_FORMAT

logger = logging.getLogger(__name__)


def parse_source_date(value: str | None, fmt: str = SOURCE_DATE_FORMAT) -> date | None:
    """Parse a register date cell.

    Parameters
    ----------
    value
        Raw cell text, normally ``DD/MM/YYYY``.
    fmt
        ``strptime`` format of the source cell.

    Returns
    -------
    date | None
        Parsed date, or ``None`` for blank or invalid dates (e.g. ``31/02/2024``).
    """
    if not value or not value.strip():
        return None

    try:
        return datetime.strptime(value.strip(), fmt).date()
    except ValueError:
        return None


def change_date_format(
    value: str | None,
    init: str = SOURCE_DATE_FORMAT,
    end: str = ISO_DATE_FORMAT,
) -> str | None:
    """Reformat a date string, returning ``None`` when it cannot be parsed.

    Examples
    --------
    >>> change_date_format("15/01/2024")
    '2024-01-15'
    >>> change_date_format("") is None
    True
    """
    parsed = parse_source_date(value, init)
    return parsed.strftime(end) if parsed is not None else None


def split_code(value: str | None) -> str:
    """Return the code of a ``"<code>-<description>"`` cell.

    The cell is split on the first ``-`` only and the code is trimmed. Cells
    without a dash are returned trimmed; a bare ``"-"`` yields ``""``.

    Examples
    --------
    >>> split_code(" 01-Factura ")
    '01'
    >>> split_code("6-RUC - Registro Unico")
    '6'
    """
    if not value:
        return ""
    return value.strip().split("-", 1)[0].strip()


def amount(value: str | None) -> float | None:
    """Parse a monetary cell.

    Blank, zero, negative, non-finite, and unparseable cells all collapse
    to ``None``. Comma and space (including non-breaking space) thousands
    separators are accepted (``"1,234.50"``); underscores are not.

    Examples
    --------
    >>> amount("123.45")
    123.45
    >>> amount("0") is None
    True
    >>> amount("abc") is None
    True
    """
    if value is None:
        return None

    text = value.strip().replace(",", "").replace(" ", "").replace("\xa0", "")
    # Decimal would otherwise accept "_" digit grouping
    if not text or "_" in text:
        return None

    try:
        result = float(Decimal(text))
    except (InvalidOperation, ValueError):
        logger.debug("Could not parse amount: %r", value)
        return None

    if not math.isfinite(result) or result <= 0:
        return None
    return result


def exchange_rate(code: str | None, value: str | None) -> float | None:
    """Exchange rate for a currency.

    The local currency always has rate ``1.0`` whatever the cell says; any
    other currency uses :func:`amount` on the raw cell.
    """
    if (code or "").strip() == LOCAL_CURRENCY:
        return 1.0
    return amount(value)
