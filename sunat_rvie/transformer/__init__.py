"""Transformer module turning scraped register rows into sales documents.

Submodules
----------
normalizer
    Row filtering, code decomposition, date reformatting, amount parsing, and
    record assembly.

Key Functions
-------------
normalize
    Convert a list of raw rows for a period into ``SalesDocument`` records.
normalize_row
    Convert one already-filtered row.
"""

from sunat_rvie.transformer.normalizer import (
    NOTE_DOCUMENT_TYPES,
    build_reference,
    build_tax_pair,
    is_document_row,
    normalize,
    normalize_row,
)

__all__ = [
    "NOTE_DOCUMENT_TYPES",
    "build_reference",
    "build_tax_pair",
    "is_document_row",
    "normalize",
    "normalize_row",
]
