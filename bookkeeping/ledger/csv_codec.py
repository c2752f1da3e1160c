"""
CSV codec for ledger transactions.

The format is deliberately naive and matches what the desktop app has
always written:

    ID,Date,Description,Amount (ZAR),Type,VAT Rate
    TRX-001,2023-10-01,Office Supplies,1250.50,Expense,15

There is no quoting. A description containing a comma shifts the
columns of its row, which then usually fails to parse on import.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Iterable, Optional

from pydantic import ValidationError

from bookkeeping.models.transaction import (
    CsvImportResult,
    CsvRowError,
    Transaction,
)


DELIMITER = ","
MIN_FIELDS = 6

CSV_COLUMNS = [
    "ID",
    "Date",
    "Description",
    "Amount ({currency})",
    "Type",
    "VAT Rate",
]

_CENT = Decimal("0.01")

# Line breaks are \r\n, \r or \n only; form feeds, U+2028 and friends
# are ordinary description characters.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Trimming removes ASCII control characters and spaces, nothing wider.
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))

_AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_VAT_RATE_PATTERN = re.compile(r"[+-]?[0-9]+")

# Largest decimal exponent accepted for an amount (the range of a double).
MAX_AMOUNT_EXPONENT = 308


class CsvRowParseError(ValueError):
    """A CSV line had enough fields but its values did not parse."""
    pass


def csv_header(currency_code: str = "ZAR") -> str:
    return DELIMITER.join(CSV_COLUMNS).format(currency=currency_code)


def format_amount(amount: Decimal) -> str:
    """Two decimal places, rounding half up, at any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return format(amount.quantize(_CENT, rounding=ROUND_HALF_UP), "f")


def transaction_to_row(transaction: Transaction) -> str:
    return DELIMITER.join([
        transaction.id,
        transaction.date,
        transaction.description,
        format_amount(transaction.amount),
        transaction.type_label,
        str(transaction.vat_rate),
    ])


def encode_transactions(
    transactions: Iterable[Transaction],
    currency_code: str = "ZAR",
) -> str:
    """Header line plus one line per transaction, each newline terminated."""
    lines = [csv_header(currency_code)]
    lines.extend(transaction_to_row(t) for t in transactions)
    return "\n".join(lines) + "\n"


def split_fields(line: str) -> list[str]:
    """
    Split on the delimiter and drop trailing empty fields.

    A line ending in a delimiter therefore counts one field fewer.
    """
    fields = line.split(DELIMITER)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def split_lines(text: str) -> list[str]:
    """Split a payload into lines; a final line break does not start a new line."""
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


def parse_row(line: str) -> Optional[Transaction]:
    """
    Parse one data line.

    Returns None for a line with fewer than six fields.

    Raises:
        CsvRowParseError: If the amount or VAT rate does not parse,
                          or the values do not make a valid transaction
    """
    fields = split_fields(line)
    if len(fields) < MIN_FIELDS:
        return None

    values = [field.strip(_TRIM_CHARS) for field in fields]

    # Plain decimal notation only: no digit separators, NaN or Infinity.
    if not _AMOUNT_PATTERN.fullmatch(values[3]):
        raise CsvRowParseError(f"Invalid amount: {values[3]!r}")
    try:
        amount = Decimal(values[3])
    except InvalidOperation:
        raise CsvRowParseError(f"Invalid amount: {values[3]!r}")
    if amount and amount.adjusted() > MAX_AMOUNT_EXPONENT:
        raise CsvRowParseError(f"Amount out of range: {values[3]!r}")

    if not _VAT_RATE_PATTERN.fullmatch(values[5]):
        raise CsvRowParseError(f"Invalid VAT rate: {values[5]!r}")
    vat_rate = int(values[5])

    try:
        return Transaction(
            id=values[0],
            date=values[1],
            description=values[2],
            amount=amount,
            type=values[4],
            vat_rate=vat_rate,
        )
    except ValidationError as e:
        raise CsvRowParseError(_format_validation_error(e))


def decode_transactions(text: str) -> CsvImportResult:
    """
    Parse a CSV payload.

    The first line is always discarded as the header, whatever it holds.
    Bad lines are collected and parsing continues with the next one.
    """
    result = CsvImportResult()

    for line_number, line in enumerate(split_lines(text), start=1):
        if line_number == 1:
            continue

        try:
            transaction = parse_row(line)
        except CsvRowParseError as e:
            result.rejected_rows.append(CsvRowError(
                line_number=line_number,
                line=line,
                reason=str(e),
            ))
            continue

        if transaction is None:
            result.short_lines += 1
            continue

        result.imported.append(transaction)

    return result
