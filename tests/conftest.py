"""Pytest configuration for sunat_rvie tests.

This module provides:
- Raw register row factory mirroring the scraped table columns
- Period and portal configuration fixtures
- Playwright page/frame doubles for navigator tests
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from sunat_rvie.models import RAW_COLUMNS, Period

RowFactory = Callable[..., dict[str, str]]


@pytest.fixture
def period() -> Period:
    """January 2024."""
    return Period(2024, 1)


@pytest.fixture
def make_row() -> RowFactory:
    """Build a complete invoice row; keyword arguments override cells."""

    def _make_row(**overrides: str) -> dict[str, str]:
        row = dict.fromkeys(RAW_COLUMNS, "")
        row.update(
            {
                "accountingPeriod": "202401",
                "operationUniqueCode": "140001",
                "accountingCorrelativeNumber": "M0001",
                "documentEmissionDate": "15/01/2024",
                "documentType": "01-Factura",
                "documentSerial": "F001",
                "documentNumber": "123",
                "customerIdentityId": "6-RUC",
                "customerIdentityNumber": "20123456789",
                "customerName": "ACME SA",
                "igvTaxable": "100.00",
                "igvTax": "18.00",
                "payableAmount": "118.00",
                "currencyCode": "PEN",
                "referenceDocumentType": "-",
            },
        )
        row.update(overrides)
        return row

    return _make_row


@pytest.fixture
def portal_config() -> dict[str, Any]:
    """Portal configuration with short budgets and no settle delay."""
    return {
        "selectors": {
            "preview_menu": "#menu",
            "application_frame": "iframe#app",
            "conditions_check": "#terms",
            "conditions_continue": "#terms-continue",
            "period_input": "#period",
            "sales_register_button": "#register",
            "generate_preview_button": "#generate",
            "report_table": "#table > table",
            "report_rows": "#table > table tr",
        },
        "timeouts": {"menu": 50, "frame": 50, "conditions": 50, "controls": 50, "table": 50},
        "frame_settle_ms": 0,
    }


@pytest.fixture
def frame() -> MagicMock:
    """Workspace frame double; every selector resolves to a clickable handle."""
    return MagicMock(name="frame")


@pytest.fixture
def page(frame: MagicMock) -> MagicMock:
    """Page double whose application iframe resolves to ``frame``."""
    page = MagicMock(name="page")
    page.query_selector.return_value.content_frame.return_value = frame
    return page
