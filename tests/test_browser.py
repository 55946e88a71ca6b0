"""Tests for the Playwright browser session."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from sunat_rvie.scraper.browser import browser_session
from sunat_rvie.scraper.errors import NavigationError

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def playwright() -> MagicMock:
    """Playwright double returned by sync_playwright()."""
    return MagicMock()


@pytest.fixture
def sync_playwright(playwright: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch sync_playwright to hand out the Playwright double."""
    with patch("sunat_rvie.scraper.browser.sync_playwright") as mock_sync:
        mock_sync.return_value.__enter__.return_value = playwright
        yield mock_sync


class TestBrowserSession:
    """Tests for browser_session."""

    def test_yields_page_and_closes(self, sync_playwright: MagicMock, playwright: MagicMock) -> None:
        """The session restores storage state and closes everything on exit."""
        browser = playwright.chromium.launch.return_value
        context = browser.new_context.return_value

        with browser_session(storage_state="state.json") as (_browser, _context, page):
            assert page is context.new_page.return_value

        assert browser.new_context.call_args.kwargs["storage_state"] == "state.json"
        assert browser.new_context.call_args.kwargs["locale"] == "es-PE"
        context.close.assert_called_once()
        browser.close.assert_called_once()

    def test_start_page_opened(self, sync_playwright: MagicMock, playwright: MagicMock) -> None:
        """The start URL is loaded before the page is handed out."""
        with browser_session(start_url="https://e-menu.sunat.gob.pe") as (_browser, _context, page):
            page.goto.assert_called_once()
            assert page.goto.call_args.args == ("https://e-menu.sunat.gob.pe",)

    def test_start_page_timeout(self, sync_playwright: MagicMock, playwright: MagicMock) -> None:
        """A start page that never loads becomes a navigation error."""
        browser = playwright.chromium.launch.return_value
        context = browser.new_context.return_value
        context.new_page.return_value.goto.side_effect = PlaywrightTimeout("Timeout 60000ms exceeded")

        with pytest.raises(NavigationError, match="e-menu") as exc_info:
            with browser_session(start_url="https://e-menu.sunat.gob.pe"):
                pytest.fail("session should not be entered")

        assert isinstance(exc_info.value.__cause__, PlaywrightTimeout)
        context.close.assert_called_once()
        browser.close.assert_called_once()
