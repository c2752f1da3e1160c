"""Ledger engine package."""

from bookkeeping.ledger.csv_codec import (
    CsvRowParseError,
    csv_header,
    decode_transactions,
    encode_transactions,
    format_amount,
)
from bookkeeping.ledger.engine import Ledger
from bookkeeping.ledger.errors import (
    EntryValidationError,
    LedgerError,
    NotFoundError,
    OutOfRangeError,
)

__all__ = [
    "CsvRowParseError",
    "EntryValidationError",
    "Ledger",
    "LedgerError",
    "NotFoundError",
    "OutOfRangeError",
    "csv_header",
    "decode_transactions",
    "encode_transactions",
    "format_amount",
]
