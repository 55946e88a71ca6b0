"""Shared utility functions for sunat_rvie package."""

from sunat_rvie.utils.parsing import (
    amount,
    change_date_format,
    exchange_rate,
    parse_source_date,
    split_code,
)

__all__ = [
    "amount",
    "change_date_format",
    "exchange_rate",
    "parse_source_date",
    "split_code",
]
