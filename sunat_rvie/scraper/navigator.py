"""Navigation to the SOL "Preliminar del Registro de Ventas e Ingresos".

Steps run strictly in sequence because each one depends on the DOM left by
the previous one:

1. open the menu entry (present in the DOM but possibly hidden)
2. acquire the application iframe (the workspace)
3. accept the electronic-generator terms when the portal shows them
4. type the period and open the sales register
5. trigger generation of the preliminary register

Selectors and wait budgets live in ``config/config.json`` under ``portal``.
Any required step that does not become available in time raises
:class:`NavigationError`; the terms step is optional and only reports whether
it was found.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from playwright.sync_api import Error as PlaywrightError

from sunat_rvie.config import get_portal_config, setup_logging
from sunat_rvie.models import RAW_COLUMNS
from sunat_rvie.scraper.errors import NavigationError, ReportUnavailableError

if TYPE_CHECKING:
    from playwright.sync_api import Frame, Page

    from sunat_rvie.models import Period, RawRow

logger = setup_logging(__name__)

MENU_UNAVAILABLE = "El menú para acceder al registro preliminar de ventas no está disponible"
WORKSPACE_UNAVAILABLE = "El espacio de trabajo del registro de ventas no está disponible"
CONTROLS_UNAVAILABLE = "Los controles para acceder al registro de ventas no están disponibles"
GENERATE_UNAVAILABLE = "El control para generar el preliminar del registro de ventas no está disponible"
TABLE_UNAVAILABLE = "La tabla con el preliminar del registro de ventas no está disponible"

# Text content of every cell, one list per table row
_ROWS_SCRIPT = """
(selector) => Array.from(document.querySelectorAll(selector)).map(
    (tr) => Array.from(tr.querySelectorAll('td')).map((td) => td.textContent)
)
"""

_CLICK_SCRIPT = "(selector) => document.querySelector(selector).click()"


def _portal(portal_config: dict[str, Any] | None) -> dict[str, Any]:
    return portal_config if portal_config is not None else get_portal_config()


def open_preview_menu(page: Page, portal_config: dict[str, Any] | None = None) -> None:
    """Click the "Preliminar del Registro de Ventas Electrónico" menu entry.

    The entry sits in a collapsed menu, so it is only required to be attached
    to the DOM and is clicked from page script.

    Raises
    ------
    NavigationError
        If the entry is not attached within the ``menu`` budget.
    """
    portal = _portal(portal_config)
    selector = portal["selectors"]["preview_menu"]

    try:
        page.wait_for_selector(selector, state="attached", timeout=portal["timeouts"]["menu"])
        page.evaluate(_CLICK_SCRIPT, selector)
    except PlaywrightError as err:
        logger.warning("Preview menu entry not available: %s", selector)
        raise NavigationError(MENU_UNAVAILABLE) from err

    logger.debug("Opened preview menu entry")


def get_workspace(page: Page, portal_config: dict[str, Any] | None = None) -> Frame:
    """Return the application iframe where the register is rendered.

    Raises
    ------
    NavigationError
        If the iframe is not visible within the ``frame`` budget or has no
        content frame.
    """
    portal = _portal(portal_config)
    selector = portal["selectors"]["application_frame"]

    try:
        page.wait_for_selector(selector, state="visible", timeout=portal["timeouts"]["frame"])
        # The frame document is not attached right after the element shows up
        page.wait_for_timeout(portal.get("frame_settle_ms", 1000))
        handle = page.query_selector(selector)
        frame = handle.content_frame() if handle is not None else None
    except PlaywrightError as err:
        logger.warning("Application frame not available: %s", selector)
        raise NavigationError(WORKSPACE_UNAVAILABLE) from err

    if frame is None:
        raise NavigationError(WORKSPACE_UNAVAILABLE)

    logger.debug("Acquired workspace frame: %s", frame.url)
    return frame


def accept_conditions(workspace: Frame, portal_config: dict[str, Any] | None = None) -> bool:
    """Accept the electronic-generator terms if the portal asks for them.

    Returns
    -------
    bool
        ``True`` when the terms were shown and accepted, ``False`` when the
        controls never appeared (sessions that already accepted them).
    """
    portal = _portal(portal_config)
    selectors = portal["selectors"]
    timeout = portal["timeouts"]["conditions"]

    try:
        checkbox = workspace.wait_for_selector(selectors["conditions_check"], state="visible", timeout=timeout)
        checkbox.click()

        continue_button = workspace.wait_for_selector(
            selectors["conditions_continue"], state="visible", timeout=timeout,
        )
        continue_button.click()
    except PlaywrightError as err:
        logger.info("Terms and conditions not shown, continuing")
        logger.debug("Terms step outcome: %s", err)
        return False

    logger.info("Accepted terms and conditions")
    return True


def generate_sales_preview(
    workspace: Frame,
    period: Period,
    portal_config: dict[str, Any] | None = None,
) -> None:
    """Enter the period, open the register, and generate the preliminary.

    Raises
    ------
    NavigationError
        If the period/register controls or the generate button never show up.
    """
    portal = _portal(portal_config)
    selectors = portal["selectors"]
    timeout = portal["timeouts"]["controls"]

    try:
        period_input = workspace.wait_for_selector(selectors["period_input"], state="visible", timeout=timeout)
        period_input.type(period.display)

        register_button = workspace.wait_for_selector(
            selectors["sales_register_button"], state="visible", timeout=timeout,
        )
        register_button.click()
    except PlaywrightError as err:
        logger.warning("Sales register controls not available")
        raise NavigationError(CONTROLS_UNAVAILABLE) from err

    try:
        generate_button = workspace.wait_for_selector(
            selectors["generate_preview_button"], state="visible", timeout=timeout,
        )
        generate_button.click()
    except PlaywrightError as err:
        logger.warning("Generate preliminary control not available")
        raise NavigationError(GENERATE_UNAVAILABLE) from err

    logger.info("Requested preliminary sales register for %s", period.display)


def prepare_report(page: Page, period: Period, portal_config: dict[str, Any] | None = None) -> Frame:
    """Drive the portal up to a generated preliminary register.

    Parameters
    ----------
    page : Page
        Page of an authenticated SOL session showing the main menu.
    period : Period
        Accounting period to generate.
    portal_config : dict[str, Any] | None, optional
        ``portal`` configuration; loaded from ``config.json`` when omitted.

    Returns
    -------
    Frame
        Workspace frame holding the register, ready for :func:`extract_rows`.

    Raises
    ------
    NavigationError
        If a required control is not available in time.
    """
    portal = _portal(portal_config)

    open_preview_menu(page, portal)
    workspace = get_workspace(page, portal)
    accept_conditions(workspace, portal)
    generate_sales_preview(workspace, period, portal)

    return workspace


def cells_to_row(cells: list[str | None]) -> RawRow:
    """Map positional cell texts onto the register columns.

    Short rows (headers built from ``<th>``, separators) are padded with
    blanks; extra cells are ignored.
    """
    values = [cell if cell is not None else "" for cell in cells[: len(RAW_COLUMNS)]]
    values.extend([""] * (len(RAW_COLUMNS) - len(values)))
    return dict(zip(RAW_COLUMNS, values, strict=True))


def extract_rows(workspace: Frame, portal_config: dict[str, Any] | None = None) -> list[RawRow]:
    """Read every row of the register table, noise rows included.

    Raises
    ------
    ReportUnavailableError
        If the table does not appear within the ``table`` budget.
    """
    portal = _portal(portal_config)
    selectors = portal["selectors"]

    try:
        workspace.wait_for_selector(selectors["report_table"], state="visible", timeout=portal["timeouts"]["table"])
        raw_cells: list[list[str | None]] = workspace.evaluate(_ROWS_SCRIPT, selectors["report_rows"])
    except PlaywrightError as err:
        logger.warning("Register table not available")
        raise ReportUnavailableError(TABLE_UNAVAILABLE) from err

    rows = [cells_to_row(cells) for cells in raw_cells]
    logger.info("Extracted %d table rows", len(rows))
    return rows
