"""Accounting period and sales-document value objects.

This module contains pure data structures with no scraping or parsing
dependencies, so the normalizer, navigator, and writer can all import them
without circular imports. Every record is a frozen dataclass; ``None`` stands
for an absent (unreported) value and is dropped by :meth:`SalesDocument.to_dict`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Cpe",
    "Currency",
    "Customer",
    "NOTE_DOCUMENT_TYPES",
    "RAW_COLUMNS",
    "Period",
    "RawRow",
    "Reference",
    "SalesDocument",
    "TaxPair",
]

# One scraped table row: column name -> raw cell text
RawRow = dict[str, str]

# Credit note and debit note document types
NOTE_DOCUMENT_TYPES = frozenset({"07", "08"})

# Report table columns, in source order
RAW_COLUMNS = (
    "accountingPeriod",
    "operationUniqueCode",
    "accountingCorrelativeNumber",
    "documentEmissionDate",
    "documentExpirationDate",
    "documentType",
    "documentSerial",
    "documentNumber",
    "finalNumber",
    "customerIdentityId",
    "customerIdentityNumber",
    "customerName",
    "exportAmount",
    "igvTaxable",
    "taxableBaseDiscount",
    "totalAmountExempt",
    "totalAmountNonTaxable",
    "totalAmountIsc",
    "igvTax",
    "igvTaxDiscount",
    "ivapTaxable",
    "ivapTax",
    "others01",
    "payableAmount",
    "currencyCode",
    "currencyExchange",
    "referenceDocumentEmissionDate",
    "referenceDocumentType",
    "referenceDocumentSerial",
    "referenceDocumentNumber",
)

_COMPACT_PATTERN = re.compile(r"^(\d{4})(\d{2})$")
_DISPLAY_PATTERN = re.compile(r"^(\d{2})/(\d{4})$")


@dataclass(frozen=True)
class Period:
    """Accounting period held as calendar ``(year, month)``.

    Attributes
    ----------
    year : int
        Four-digit year.
    month : int
        Month number in ``1..12``.

    Examples
    --------
    >>> period = Period.from_compact("202401")
    >>> period.display
    '01/2024'
    >>> period.accounting
    '20240100'
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            msg = f"Invalid month: {self.month}. Must be 1-12."
            raise ValueError(msg)
        if not 1 <= self.year <= 9999:
            msg = f"Invalid year: {self.year}"
            raise ValueError(msg)

    @classmethod
    def from_compact(cls, value: str) -> Period:
        """Parse the numeric ``YYYYMM`` form.

        Raises
        ------
        ValueError
            If ``value`` is not six digits or the month is out of range.
        """
        match = _COMPACT_PATTERN.match(str(value).strip())
        if not match:
            msg = f"Invalid period: {value!r}. Expected YYYYMM."
            raise ValueError(msg)
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_display(cls, value: str) -> Period:
        """Parse the portal display form ``MM/YYYY``."""
        match = _DISPLAY_PATTERN.match(str(value).strip())
        if not match:
            msg = f"Invalid period: {value!r}. Expected MM/YYYY."
            raise ValueError(msg)
        return cls(int(match.group(2)), int(match.group(1)))

    @property
    def compact(self) -> str:
        """Numeric identity form, e.g. ``"202401"``."""
        return f"{self.year:04d}{self.month:02d}"

    @property
    def display(self) -> str:
        """Form typed into the portal period field, e.g. ``"01/2024"``."""
        return f"{self.month:02d}/{self.year:04d}"

    @property
    def accounting(self) -> str:
        """Output period with the ``00`` day padding, e.g. ``"20240100"``."""
        return f"{self.compact}00"

    def __str__(self) -> str:
        return self.compact


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class Cpe:
    """Identity of the electronic payment document (CPE)."""

    type: str
    serial: str
    number: str
    issuance_date: str | None = None
    expiration_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render camelCase keys, omitting absent dates."""
        return _drop_none(
            {
                "type": self.type,
                "serial": self.serial,
                "number": self.number,
                "issuanceDate": self.issuance_date,
                "expirationDate": self.expiration_date,
            },
        )


@dataclass(frozen=True)
class Reference:
    """Document adjusted by a credit or debit note."""

    type: str
    serial: str
    number: str
    issuance_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render camelCase keys, omitting an unparseable date."""
        return _drop_none(
            {
                "type": self.type,
                "serial": self.serial,
                "number": self.number,
                "issuanceDate": self.issuance_date,
            },
        )


@dataclass(frozen=True)
class Currency:
    """Currency code and exchange rate (``None`` when not reported)."""

    code: str
    exchange_rate: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render camelCase keys."""
        return _drop_none({"code": self.code, "exchangeRate": self.exchange_rate})


@dataclass(frozen=True)
class Customer:
    """Buyer identity as listed in the register."""

    identity_type: str
    identity_number: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Render camelCase keys."""
        return {
            "identityType": self.identity_type,
            "identityNumber": self.identity_number,
            "name": self.name,
        }


@dataclass(frozen=True)
class TaxPair:
    """Taxable base and tax amount; both are always present."""

    taxable_amount: float
    tax_amount: float

    def to_dict(self) -> dict[str, Any]:
        """Render camelCase keys."""
        return {"taxableAmount": self.taxable_amount, "taxAmount": self.tax_amount}


@dataclass(frozen=True)
class SalesDocument:
    """Canonical sales-register record.

    Attributes
    ----------
    cuo : str
        Unique operation code (CUO).
    sequential : str
        Accounting correlative number.
    accounting_period : str
        Requested period rendered as ``YYYYMM00``.
    cpe : Cpe
        Document identity.
    currency : Currency
        Currency code and exchange rate.
    customer : Customer
        Buyer identity.
    reference : Reference | None
        Adjusted document; only for credit (07) and debit (08) notes.
    igv, ivap : TaxPair | None
        General sales tax and rice-sales tax pairs, present only as pairs.
    taxable_amount, export_amount, exempt_amount, non_taxable_amount,
    isc_amount, payable_amount : float | None
        Independently optional positive amounts.
    """

    cuo: str
    sequential: str
    accounting_period: str
    cpe: Cpe
    currency: Currency
    customer: Customer
    reference: Reference | None = None
    igv: TaxPair | None = None
    ivap: TaxPair | None = None
    taxable_amount: float | None = None
    export_amount: float | None = None
    exempt_amount: float | None = None
    non_taxable_amount: float | None = None
    isc_amount: float | None = None
    payable_amount: float | None = None

    @property
    def is_note(self) -> bool:
        """Whether the document is a credit or debit note.

        Decided by the document type, so a note whose reference was
        incomplete in the register is still a note.
        """
        return self.cpe.type in NOTE_DOCUMENT_TYPES

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase output shape, dropping absent fields."""
        return _drop_none(
            {
                "cuo": self.cuo,
                "sequential": self.sequential,
                "accountingPeriod": self.accounting_period,
                "cpe": self.cpe.to_dict(),
                "currency": self.currency.to_dict(),
                "customer": self.customer.to_dict(),
                "reference": self.reference.to_dict() if self.reference else None,
                "igv": self.igv.to_dict() if self.igv else None,
                "ivap": self.ivap.to_dict() if self.ivap else None,
                "taxableAmount": self.taxable_amount,
                "exportAmount": self.export_amount,
                "exemptAmount": self.exempt_amount,
                "nonTaxableAmount": self.non_taxable_amount,
                "iscAmount": self.isc_amount,
                "payableAmount": self.payable_amount,
            },
        )
