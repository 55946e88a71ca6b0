#!/usr/bin/env python3
"""RVIE orchestrator - open SOL, generate the preliminary register, save records.

This module orchestrates the complete extraction workflow:
1. Open a browser session restoring an authenticated SOL login
2. Navigate to the preliminary sales register and generate it
3. Scrape the register table and normalize the rows
4. Save records to JSON (and optionally CSV)
5. Log a summary report

Usage (from project root):
    python -m sunat_rvie.main --period 202401
    python -m sunat_rvie.main -p 202401 --storage-state sol_state.json --csv
    python -m sunat_rvie.main -p 202401 --no-save --quiet --no-headless

CLI Flags:
    --period, -p        Period(s) to extract as YYYYMM (required)
    --storage-state     Playwright storage state of a logged-in SOL session
    --start-url         SOL menu URL opened before navigation
    --output-dir, -o    Directory for output files (default: data/processed)
    --csv               Also write a flat CSV file
    --no-save           Don't save output files
    --quiet             Suppress the summary report
    --no-headless       Show browser window
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from sunat_rvie.config import (
    LOCAL_CURRENCY,
    SUNAT_HEADLESS,
    SUNAT_START_URL,
    SUNAT_STORAGE_STATE,
    setup_logging,
)
from sunat_rvie.models import Period
from sunat_rvie.preliminary_sales import PreliminarySales
from sunat_rvie.scraper.browser import browser_session
from sunat_rvie.scraper.errors import RvieError
from sunat_rvie.writer.record_writer import save_records, write_records_csv

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sunat_rvie.models import SalesDocument

logger = setup_logging(__name__)


# =============================================================================
# Reporting
# =============================================================================


def log_records_report(records: Sequence[SalesDocument], period: Period) -> None:
    """Log a per-document-type summary of extracted records.

    Parameters
    ----------
    records : Sequence[SalesDocument]
        Normalized documents.
    period : Period
        Period the documents belong to.
    """
    by_type = Counter(record.cpe.type for record in records)
    payable = sum(record.payable_amount or 0.0 for record in records if record.currency.code == LOCAL_CURRENCY)
    foreign = sum(1 for record in records if record.currency.code != LOCAL_CURRENCY)

    logger.info("=" * 60)
    logger.info("Preliminary sales register %s: %d documents", period.display, len(records))
    for document_type, count in sorted(by_type.items()):
        logger.info("  type %s: %d", document_type or "<blank>", count)
    logger.info("  payable total (PEN documents): %.2f", payable)
    if foreign:
        logger.info("  documents in foreign currency: %d", foreign)
    logger.info("=" * 60)


# =============================================================================
# Main Processing
# =============================================================================


def process_period(
    sales: PreliminarySales,
    save: bool = True,
    write_csv: bool = False,
    verbose: bool = True,
    output_dir: Path | None = None,
) -> list[SalesDocument]:
    """Run navigation, extraction, and output for one period.

    Parameters
    ----------
    sales : PreliminarySales
        Register bound to a period and an authenticated page.
    save : bool, optional
        Persist records to JSON when ``True``.
    write_csv : bool, optional
        Also persist a flat CSV when saving.
    verbose : bool, optional
        Log a summary report when ``True``.
    output_dir : Path | None, optional
        Output directory override.

    Returns
    -------
    list[SalesDocument]
        Extracted documents.

    Raises
    ------
    NavigationError
        If the portal controls are not available.
    ReportUnavailableError
        If the register table never appears.
    """
    sales.goto()
    records = sales.get_information()

    if save:
        save_records(records, sales.period, output_dir)
        if write_csv:
            write_records_csv(records, sales.period, output_dir)

    if verbose:
        log_records_report(records, sales.period)

    return records


# =============================================================================
# CLI
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Generate and extract the SUNAT preliminary sales register (RVIE).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m sunat_rvie.main --period 202401
  python -m sunat_rvie.main -p 202401 202402 --csv
  python -m sunat_rvie.main -p 202401 --storage-state sol_state.json --no-headless
        """,
    )
    parser.add_argument("--period", "-p", nargs="+", required=True, help="Period(s) as YYYYMM (e.g., 202401)")
    parser.add_argument(
        "--storage-state",
        default=SUNAT_STORAGE_STATE or None,
        help="Playwright storage state of an authenticated SOL session (default: $SUNAT_STORAGE_STATE)",
    )
    parser.add_argument(
        "--start-url",
        default=SUNAT_START_URL or None,
        help="SOL menu URL to open before navigating (default: $SUNAT_START_URL)",
    )
    parser.add_argument("--output-dir", "-o", type=Path, default=None, help="Output directory")
    parser.add_argument("--csv", action="store_true", help="Also write a CSV file")
    parser.add_argument("--no-save", action="store_true", help="Don't save output files")
    parser.add_argument("--quiet", action="store_true", help="Don't log the summary report")
    parser.add_argument("--no-headless", action="store_true", help="Show browser window")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI flags and extract the requested periods.

    Returns
    -------
    int
        ``0`` when every period succeeded; ``1`` when the session could not
        be opened or a period failed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        periods = [Period.from_compact(value) for value in args.period]
    except ValueError as err:
        parser.error(str(err))

    if args.storage_state and not Path(args.storage_state).is_file():
        logger.error("Storage state file not found: %s", args.storage_state)
        return 1

    headless = SUNAT_HEADLESS and not args.no_headless
    failures = 0

    try:
        with browser_session(headless=headless, storage_state=args.storage_state, start_url=args.start_url) as (
            _browser,
            _context,
            page,
        ):
            for period in periods:
                sales = PreliminarySales(period, page)
                try:
                    process_period(
                        sales,
                        save=not args.no_save,
                        write_csv=args.csv,
                        verbose=not args.quiet,
                        output_dir=args.output_dir,
                    )
                except RvieError as err:
                    logger.error("Extraction failed for %s: %s", period.display, err)
                    failures += 1
                    # Page state is unknown after a failed step
                    break
    except (RvieError, PlaywrightError) as err:
        logger.error("Browser session failed: %s", err)
        return 1

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
