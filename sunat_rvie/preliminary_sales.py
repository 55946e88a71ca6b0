"""Preliminary sales register of a taxpayer for one accounting period."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sunat_rvie.config import setup_logging
from sunat_rvie.models import Period
from sunat_rvie.scraper.errors import NavigationError
from sunat_rvie.scraper.navigator import extract_rows, prepare_report
from sunat_rvie.transformer.normalizer import normalize

if TYPE_CHECKING:
    from playwright.sync_api import Frame, Page

    from sunat_rvie.models import SalesDocument

logger = setup_logging(__name__)


class PreliminarySales:
    """Generate and read the preliminary RVIE of a period.

    Parameters
    ----------
    period : str | Period
        Accounting period, ``YYYYMM`` or a :class:`Period`.
    page : Page
        Page of an authenticated SOL session.
    portal_config : dict[str, Any] | None, optional
        Portal selectors and budgets; loaded from ``config.json`` when omitted.

    Examples
    --------
    >>> sales = PreliminarySales("202401", page)  # doctest: +SKIP
    >>> sales.goto()  # doctest: +SKIP
    >>> documents = sales.get_information()  # doctest: +SKIP
    """

    def __init__(self, period: str | Period, page: Page, portal_config: dict[str, Any] | None = None) -> None:
        self._period = period if isinstance(period, Period) else Period.from_compact(period)
        self._page = page
        self._portal_config = portal_config
        self._workspace: Frame | None = None
        self._information: list[SalesDocument] | None = None

    @property
    def period(self) -> Period:
        return self._period

    @property
    def page(self) -> Page:
        return self._page

    @property
    def workspace(self) -> Frame | None:
        """Workspace frame left by :meth:`goto`, ``None`` before it runs."""
        return self._workspace

    @property
    def information(self) -> list[SalesDocument] | None:
        """Documents from the last :meth:`get_information` call, ``None`` before it runs."""
        return self._information

    def goto(self) -> Frame:
        """Navigate to the register and trigger generation of the preliminary.

        Raises
        ------
        NavigationError
            If a required portal control is not available in time.
        """
        logger.info("Preparing preliminary sales register for %s", self._period.display)
        self._workspace = prepare_report(self._page, self._period, self._portal_config)
        return self._workspace

    def get_information(self) -> list[SalesDocument]:
        """Read the generated register and return its documents.

        Every call reads the table again and replaces :attr:`information`.

        Raises
        ------
        NavigationError
            If :meth:`goto` has not produced a workspace.
        ReportUnavailableError
            If the register table never appears.
        """
        if self._workspace is None:
            msg = "No workspace available; call goto() before get_information()"
            raise NavigationError(msg)

        raw_rows = extract_rows(self._workspace, self._portal_config)
        self._information = normalize(raw_rows, self._period)
        return self._information
