"""Browser automation utilities using Playwright.

This module provides the browser session used to reach the SOL portal. It
wraps Playwright's sync API with a context manager for clean resource
handling.

Main components:
- browser_session: Context manager for complete browser lifecycle
- create_browser / create_browser_context: building blocks used by the session

Notes
-----
Logging in to SOL is not automated. An authenticated session is reused
through a Playwright storage-state file (cookies and local storage saved
from a manual login with ``context.storage_state(path=...)``).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from playwright.sync_api import Browser, BrowserContext, Page, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from sunat_rvie.config import setup_logging
from sunat_rvie.scraper.errors import NavigationError

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from playwright.sync_api import Playwright

logger = setup_logging(__name__)


def create_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Create a Chromium browser instance.

    Parameters
    ----------
    playwright : Playwright
        Playwright instance from sync_playwright context.
    headless : bool, optional
        Run browser in headless mode. Default True for server use.

    Returns
    -------
    Browser
        Configured Chromium browser instance.
    """
    return playwright.chromium.launch(
        headless=headless,
        args=[
            "--disable-gpu",  # No GPU in headless environments
            "--disable-dev-shm-usage",  # Prevents /dev/shm overflow in Docker
            "--no-sandbox",  # Required for root/containerized execution
        ],
    )


def create_browser_context(
    browser: Browser,
    storage_state: str | Path | None = None,
) -> BrowserContext:
    """Create a browser context, optionally restoring a saved SOL session.

    Parameters
    ----------
    browser : Browser
        Browser instance to create context on.
    storage_state : str | Path | None, optional
        Playwright storage-state file of an authenticated session.

    Returns
    -------
    BrowserContext
        Context configured with a desktop viewport and Spanish (Peru) locale.
    """
    return browser.new_context(
        viewport={"width": 1920, "height": 1080},
        user_agent=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        locale="es-PE",
        storage_state=str(storage_state) if storage_state else None,
    )


@contextmanager
def browser_session(
    headless: bool = True,
    storage_state: str | Path | None = None,
    start_url: str | None = None,
) -> Generator[tuple[Browser, BrowserContext, Page], None, None]:
    """Context manager for a complete browser session.

    Parameters
    ----------
    headless : bool, optional
        Run browser in headless mode. Default True.
    storage_state : str | Path | None, optional
        Saved authenticated session to restore.
    start_url : str | None, optional
        Page to open before yielding (the SOL menu).

    Yields
    ------
    tuple[Browser, BrowserContext, Page]
        Tuple containing browser, context, and initial page for interaction.

    Raises
    ------
    NavigationError
        If the start page does not load.
    """
    with sync_playwright() as playwright:
        browser = create_browser(playwright, headless=headless)
        context = create_browser_context(browser, storage_state=storage_state)
        page = context.new_page()

        try:
            if start_url:
                logger.debug("Opening start page: %s", start_url)
                try:
                    page.goto(start_url, wait_until="networkidle", timeout=60000)
                except PlaywrightError as err:
                    logger.warning("Start page did not load: %s", start_url)
                    msg = f"No se pudo abrir la página inicial: {start_url}"
                    raise NavigationError(msg) from err
            yield browser, context, page
        finally:
            # Context closes its pages, browser closes remaining contexts
            context.close()
            browser.close()
