"""Tests for the PreliminarySales register object."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock, patch

import pytest

from sunat_rvie.models import Period
from sunat_rvie.preliminary_sales import PreliminarySales
from sunat_rvie.scraper.errors import NavigationError, ReportUnavailableError

if TYPE_CHECKING:
    from tests.conftest import RowFactory


class TestConstruction:
    """Tests for period handling."""

    def test_compact_period(self, page: MagicMock) -> None:
        """A YYYYMM string is parsed."""
        assert PreliminarySales("202401", page).period == Period(2024, 1)

    def test_period_object(self, page: MagicMock) -> None:
        """A Period is used as-is."""
        period = Period(2023, 12)
        sales = PreliminarySales(period, page)
        assert sales.period is period
        assert sales.page is page
        assert sales.workspace is None
        assert sales.information is None

    def test_invalid_period(self, page: MagicMock) -> None:
        """Bad periods fail before any navigation."""
        with pytest.raises(ValueError, match="YYYYMM"):
            PreliminarySales("01/2024", page)


class TestFlow:
    """Tests for goto and get_information."""

    def test_get_information_before_goto(self, page: MagicMock) -> None:
        """Reading without a workspace is a navigation error."""
        with pytest.raises(NavigationError, match="goto"):
            PreliminarySales("202401", page).get_information()

    def test_goto_then_get_information(
        self,
        page: MagicMock,
        frame: MagicMock,
        portal_config: dict[str, Any],
        make_row: RowFactory,
    ) -> None:
        """The generated register is read and normalized."""
        header = {"documentEmissionDate": "Fecha"}
        rows = [header, make_row(documentNumber="1"), make_row(documentNumber="2")]
        sales = PreliminarySales("202401", page, portal_config)

        with patch("sunat_rvie.preliminary_sales.extract_rows", return_value=rows) as mock_extract:
            workspace = sales.goto()
            documents = sales.get_information()

        assert workspace is frame
        assert sales.workspace is frame
        mock_extract.assert_called_once_with(frame, portal_config)
        assert [d.cpe.number for d in documents] == ["1", "2"]
        assert all(d.accounting_period == "20240100" for d in documents)

    def test_each_call_extracts_again(self, page: MagicMock, make_row: RowFactory) -> None:
        """Each call reads the table again and replaces the stored records."""
        sales = PreliminarySales("202401", page)

        with (
            patch("sunat_rvie.preliminary_sales.prepare_report", return_value=MagicMock()),
            patch(
                "sunat_rvie.preliminary_sales.extract_rows",
                side_effect=[[make_row(documentNumber="1")], []],
            ),
        ):
            sales.goto()
            first = sales.get_information()
            assert sales.information is first
            second = sales.get_information()

        assert len(first) == 1
        assert second == []
        assert sales.information is second

    def test_report_error_propagates(self, page: MagicMock) -> None:
        """Table errors reach the caller unchanged."""
        sales = PreliminarySales("202401", page)
        error = ReportUnavailableError("La tabla no está disponible")

        with (
            patch("sunat_rvie.preliminary_sales.prepare_report", return_value=MagicMock()),
            patch("sunat_rvie.preliminary_sales.extract_rows", side_effect=error),
        ):
            sales.goto()
            with pytest.raises(ReportUnavailableError) as exc_info:
                sales.get_information()

        assert exc_info.value is error
        assert sales.information is None
