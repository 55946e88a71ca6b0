"""Scraper module driving the SOL portal to the preliminary sales register.

- browser_session: Playwright session restoring an authenticated SOL login
- prepare_report: navigate, accept terms, and generate the register
- extract_rows: read the register table as raw rows
"""

from sunat_rvie.scraper.browser import browser_session, create_browser, create_browser_context
from sunat_rvie.scraper.errors import NavigationError, ReportUnavailableError, RvieError
from sunat_rvie.scraper.navigator import accept_conditions, extract_rows, prepare_report

__all__ = [
    "NavigationError",
    "ReportUnavailableError",
    "RvieError",
    "accept_conditions",
    "browser_session",
    "create_browser",
    "create_browser_context",
    "extract_rows",
    "prepare_report",
]
