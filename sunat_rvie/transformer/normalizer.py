"""Normalization of scraped RVIE rows into sales-document records.

The report table mixes real documents with header and separator rows and
carries free-text cells: ``DD/MM/YYYY`` dates, ``"<code>-<description>"``
classifiers, and optional monetary strings. :func:`normalize` turns that into
:class:`~sunat_rvie.models.SalesDocument` records.

Data-quality problems never raise. A row whose emission date is not a valid
``DD/MM/YYYY`` date is dropped; any other bad cell only blanks its own field.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sunat_rvie.config import LOCAL_CURRENCY, setup_logging
from sunat_rvie.models import NOTE_DOCUMENT_TYPES, Cpe, Currency, Customer, Reference, SalesDocument, TaxPair
from sunat_rvie.utils.parsing import (
    amount,
    change_date_format,
    exchange_rate,
    parse_source_date,
    split_code,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sunat_rvie.models import Period

logger = setup_logging(__name__)


def _cell(row: Mapping[str, str], column: str) -> str:
    """Return a trimmed cell, treating missing or ``None`` cells as blank."""
    value = row.get(column)
    return value.strip() if isinstance(value, str) else ""


def is_document_row(row: Mapping[str, str]) -> bool:
    """Whether a row is a real document (its emission date parses)."""
    return parse_source_date(_cell(row, "documentEmissionDate")) is not None


def is_note_type(document_type: str) -> bool:
    """Whether a decomposed document type code is a credit or debit note."""
    return document_type in NOTE_DOCUMENT_TYPES


def build_reference(row: Mapping[str, str], document_type: str) -> Reference | None:
    """Build the adjusted-document reference of a credit or debit note.

    Parameters
    ----------
    row
        Raw register row.
    document_type
        Decomposed document type code of the row.

    Returns
    -------
    Reference | None
        Populated reference when ``document_type`` is ``07``/``08`` and the
        reference type, serial, number, and emission date are all present;
        ``None`` otherwise.
    """
    if not is_note_type(document_type):
        return None

    ref_type = split_code(_cell(row, "referenceDocumentType"))
    ref_serial = _cell(row, "referenceDocumentSerial")
    ref_number = _cell(row, "referenceDocumentNumber")
    ref_date = _cell(row, "referenceDocumentEmissionDate")

    if not (ref_type and ref_serial and ref_number and ref_date):
        logger.debug("Note %s without complete reference, omitting it", _cell(row, "documentNumber"))
        return None

    return Reference(
        type=ref_type,
        serial=ref_serial,
        number=ref_number,
        issuance_date=change_date_format(ref_date),
    )


def build_tax_pair(taxable_cell: str, tax_cell: str) -> TaxPair | None:
    """Pair a taxable base with its tax, only when both amounts are present."""
    taxable = amount(taxable_cell)
    tax = amount(tax_cell)
    if taxable is None or tax is None:
        return None
    return TaxPair(taxable_amount=taxable, tax_amount=tax)


def build_currency(row: Mapping[str, str]) -> Currency:
    """Build the currency block, flagging foreign rows without a usable rate."""
    code = _cell(row, "currencyCode")
    rate = exchange_rate(code, _cell(row, "currencyExchange"))
    if rate is None and code != LOCAL_CURRENCY:
        logger.warning(
            "Document %s-%s in %s has no valid exchange rate (%r)",
            _cell(row, "documentSerial"),
            _cell(row, "documentNumber"),
            code or "<blank>",
            _cell(row, "currencyExchange"),
        )
    return Currency(code=code, exchange_rate=rate)


def normalize_row(row: Mapping[str, str], period: Period) -> SalesDocument:
    """Convert a single document row into a :class:`SalesDocument`.

    The caller is expected to have filtered the row with
    :func:`is_document_row`.
    """
    document_type = split_code(_cell(row, "documentType"))

    cpe = Cpe(
        type=document_type,
        serial=_cell(row, "documentSerial"),
        number=_cell(row, "documentNumber"),
        issuance_date=change_date_format(_cell(row, "documentEmissionDate")),
        expiration_date=change_date_format(_cell(row, "documentExpirationDate")),
    )

    customer = Customer(
        identity_type=split_code(_cell(row, "customerIdentityId")),
        identity_number=_cell(row, "customerIdentityNumber"),
        name=_cell(row, "customerName"),
    )

    return SalesDocument(
        cuo=_cell(row, "operationUniqueCode"),
        sequential=_cell(row, "accountingCorrelativeNumber"),
        accounting_period=period.accounting,
        cpe=cpe,
        currency=build_currency(row),
        customer=customer,
        reference=build_reference(row, document_type),
        igv=build_tax_pair(_cell(row, "igvTaxable"), _cell(row, "igvTax")),
        ivap=build_tax_pair(_cell(row, "ivapTaxable"), _cell(row, "ivapTax")),
        taxable_amount=amount(_cell(row, "igvTaxable")),
        export_amount=amount(_cell(row, "exportAmount")),
        exempt_amount=amount(_cell(row, "totalAmountExempt")),
        non_taxable_amount=amount(_cell(row, "totalAmountNonTaxable")),
        isc_amount=amount(_cell(row, "totalAmountIsc")),
        payable_amount=amount(_cell(row, "payableAmount")),
    )


def normalize(raw_rows: Iterable[Mapping[str, str]], period: Period) -> list[SalesDocument]:
    """Normalize scraped register rows.

    Parameters
    ----------
    raw_rows
        Rows in table order, including header and noise rows.
    period
        Requested accounting period; rendered as ``YYYYMM00`` on every record.

    Returns
    -------
    list[SalesDocument]
        One record per row with a valid emission date, in input order.
    """
    documents: list[SalesDocument] = []
    skipped = 0

    for index, row in enumerate(raw_rows):
        if not is_document_row(row):
            skipped += 1
            logger.debug("Skipping row %d: invalid emission date %r", index, row.get("documentEmissionDate"))
            continue
        documents.append(normalize_row(row, period))

    logger.info("Normalized %d documents for %s (%d rows skipped)", len(documents), period.compact, skipped)
    return documents
