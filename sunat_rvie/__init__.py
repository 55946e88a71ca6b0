"""sunat-rvie: preliminary sales register extraction from SUNAT SOL.

The package drives an authenticated SOL browser session to the
"Preliminar del Registro de Ventas e Ingresos Electrónico", scrapes the
register table, and normalizes each row into a typed sales-document record.

Architecture
------------
* ``scraper``: Playwright session and portal navigation (menu, iframe,
  terms, period form, register table).
* ``transformer``: row filtering and normalization into ``SalesDocument``.
* ``models``: ``Period`` and the frozen record dataclasses.
* ``writer``: JSON/CSV outputs.

Configuration and credentials
-----------------------------
Portal selectors and wait budgets live in ``config/config.json``. Login is
not automated: ``SUNAT_STORAGE_STATE`` names a Playwright storage-state file
of an authenticated session. Paths default to ``data/`` and ``logs/`` but
respect ``DATA_DIR`` and ``LOGS_DIR`` overrides.

Entrypoints
-----------
:mod:`sunat_rvie.main` runs navigate → extract → normalize → persist.

Examples
--------
Extract January 2024:

    >>> python -m sunat_rvie.main --period 202401
"""

from sunat_rvie.models import Period, SalesDocument
from sunat_rvie.preliminary_sales import PreliminarySales
from sunat_rvie.transformer.normalizer import normalize

__version__ = "0.1.0"
__all__ = ["PreliminarySales", "Period", "SalesDocument", "__version__", "normalize"]
