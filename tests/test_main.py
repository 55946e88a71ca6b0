"""Tests for the RVIE command-line orchestrator."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from sunat_rvie.main import main, process_period
from sunat_rvie.scraper.errors import NavigationError

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from sunat_rvie.models import Period
    from tests.conftest import RowFactory


@contextmanager
def _fake_session(**_kwargs: Any) -> Generator[tuple[MagicMock, MagicMock, MagicMock], None, None]:
    yield MagicMock(), MagicMock(), MagicMock()


class TestProcessPeriod:
    """Tests for process_period."""

    def test_saves_json_and_csv(self, make_row: RowFactory, period: Period, tmp_path: Path) -> None:
        """Records are extracted and written in both formats."""
        from sunat_rvie.transformer.normalizer import normalize

        sales = MagicMock()
        sales.period = period
        sales.get_information.return_value = normalize([make_row()], period)

        records = process_period(sales, write_csv=True, verbose=True, output_dir=tmp_path)

        sales.goto.assert_called_once()
        assert len(records) == 1
        assert (tmp_path / "rvie_202401.json").exists()
        assert (tmp_path / "rvie_202401.csv").exists()

    def test_no_save(self, period: Period, tmp_path: Path) -> None:
        """Nothing is written with save disabled."""
        sales = MagicMock()
        sales.period = period
        sales.get_information.return_value = []

        process_period(sales, save=False, verbose=False, output_dir=tmp_path)

        assert list(tmp_path.iterdir()) == []


class TestMain:
    """Tests for the CLI entrypoint."""

    @patch("sunat_rvie.main.browser_session", side_effect=_fake_session)
    @patch("sunat_rvie.main.process_period")
    def test_success(self, mock_process: MagicMock, _mock_session: MagicMock) -> None:
        """Every requested period is processed."""
        assert main(["--period", "202401", "202402", "--no-save", "--quiet"]) == 0

        assert mock_process.call_count == 2
        periods = [c.args[0].period.compact for c in mock_process.call_args_list]
        assert periods == ["202401", "202402"]
        assert mock_process.call_args.kwargs["save"] is False

    @patch("sunat_rvie.main.browser_session", side_effect=_fake_session)
    @patch("sunat_rvie.main.process_period", side_effect=NavigationError("menú no disponible"))
    def test_navigation_failure(self, mock_process: MagicMock, _mock_session: MagicMock) -> None:
        """A navigation error stops the run with exit code 1."""
        assert main(["-p", "202401", "202402"]) == 1
        mock_process.assert_called_once()

    def test_invalid_period(self) -> None:
        """Malformed periods are rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--period", "2024-01"])
        assert exc_info.value.code == 2

    @patch("sunat_rvie.main.browser_session", side_effect=_fake_session)
    @patch("sunat_rvie.main.process_period")
    def test_session_options(self, _mock_process: MagicMock, mock_session: MagicMock, tmp_path: Path) -> None:
        """Storage state and start URL reach the browser session."""
        state = tmp_path / "state.json"
        state.write_text("{}", encoding="utf-8")

        main(["-p", "202401", "--storage-state", str(state), "--start-url", "https://e-menu.sunat.gob.pe"])

        kwargs = mock_session.call_args.kwargs
        assert kwargs["storage_state"] == str(state)
        assert kwargs["start_url"] == "https://e-menu.sunat.gob.pe"

    @patch("sunat_rvie.main.browser_session", side_effect=_fake_session)
    def test_missing_storage_state(self, mock_session: MagicMock, tmp_path: Path) -> None:
        """A storage state path that does not exist fails before the browser starts."""
        assert main(["-p", "202401", "--storage-state", str(tmp_path / "missing.json")]) == 1
        mock_session.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            NavigationError("No se pudo abrir la página inicial"),
            PlaywrightTimeout("Timeout 60000ms exceeded"),
            PlaywrightError("Executable doesn't exist"),
        ],
    )
    @patch("sunat_rvie.main.process_period")
    def test_session_failure_on_entry(self, mock_process: MagicMock, error: Exception) -> None:
        """A session that cannot be opened ends the run with exit code 1."""
        with patch("sunat_rvie.main.browser_session", side_effect=error):
            assert main(["-p", "202401"]) == 1
        mock_process.assert_not_called()
