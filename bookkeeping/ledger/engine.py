"""
Ledger Engine

The ledger is the sole owner of the ordered list of transactions.
Insertion order is display order.

DESIGN DECISION: Totals are a pure query.
Nothing is cached between calls; callers that want to be told about
changes subscribe and receive fresh totals after every mutation.

GUARANTEES:
- A failed operation leaves the ledger unchanged
- A bad CSV line only costs that line
"""

from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional, Union

from bookkeeping.activity import get_logger
from bookkeeping.config import get_settings
from bookkeeping.ledger.csv_codec import decode_transactions, encode_transactions
from bookkeeping.ledger.errors import NotFoundError, OutOfRangeError
from bookkeeping.models.transaction import (
    CsvImportResult,
    InventorySnapshot,
    LedgerTotals,
    Transaction,
    TransactionType,
)


TotalsCallback = Callable[[LedgerTotals], None]

# Keywords are checked in this order; the first one found in a
# description decides which figure the transaction sets.
OPENING_KEYWORD = "Opening"
PURCHASE_KEYWORD = "Purchase"
CLOSING_KEYWORD = "Closing"


class Ledger:
    """
    In-memory ledger of transactions.

    Single-threaded: every operation runs to completion before returning.
    """

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        currency_code: Optional[str] = None,
    ):
        self._transactions: list[Transaction] = list(transactions or [])
        self._inventory: Optional[InventorySnapshot] = None
        self._subscribers: list[TotalsCallback] = []
        self._currency_code = currency_code or get_settings().ledger.currency_code
        self._logger = get_logger("bookkeeping.ledger")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the transactions in display order."""
        return tuple(self._transactions)

    @property
    def currency_code(self) -> str:
        return self._currency_code

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """First transaction with this id, if any."""
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def count(self, kind: Union[TransactionType, str]) -> int:
        """Number of transactions of the given type."""
        return sum(1 for t in self._transactions if t.type == kind)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, transaction: Transaction) -> None:
        """Append a transaction. Always succeeds."""
        self._transactions.append(transaction)
        self._logger.debug("transaction_added", transaction_id=transaction.id)
        self._notify()

    def remove_at(self, index: Optional[int]) -> Transaction:
        """
        Remove the transaction at a display position.

        Raises:
            OutOfRangeError: If index is None or not a valid position
        """
        if index is None or not 0 <= index < len(self._transactions):
            raise OutOfRangeError(index, len(self._transactions))

        removed = self._transactions.pop(index)
        self._logger.debug("transaction_removed", transaction_id=removed.id, index=index)
        self._notify()
        return removed

    def remove(self, transaction_id: str) -> Transaction:
        """
        Remove the first transaction with this id.

        Raises:
            NotFoundError: If no transaction has this id
        """
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return self.remove_at(index)
        raise NotFoundError(transaction_id)

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def totals(self) -> LedgerTotals:
        """
        Income, expense, VAT and net balance in a single pass.

        VAT is collected on Expense entries only.
        """
        total_income = Decimal("0")
        total_expense = Decimal("0")
        total_vat = Decimal("0")

        for transaction in self._transactions:
            if transaction.type == TransactionType.INCOME:
                total_income += transaction.amount
            elif transaction.type == TransactionType.EXPENSE:
                total_expense += transaction.amount
                total_vat += transaction.vat_amount

        return LedgerTotals(
            total_income=total_income,
            total_expense=total_expense,
            total_vat=total_vat,
            net_balance=total_income - total_expense,
        )

    def inventory_snapshot(self) -> InventorySnapshot:
        """
        Inventory figures for the COGS formulas.

        An explicitly set snapshot wins. Otherwise the figures are derived
        from Inventory transactions by description keyword; when several
        transactions match the same keyword the last one wins.
        """
        if self._inventory is not None:
            return self._inventory

        opening = Decimal("0")
        purchases = Decimal("0")
        closing = Decimal("0")

        for transaction in self._transactions:
            if transaction.type != TransactionType.INVENTORY:
                continue
            if OPENING_KEYWORD in transaction.description:
                opening = transaction.amount
            elif PURCHASE_KEYWORD in transaction.description:
                purchases = transaction.amount
            elif CLOSING_KEYWORD in transaction.description:
                closing = transaction.amount

        return InventorySnapshot(opening=opening, purchases=purchases, closing=closing)

    def set_inventory_snapshot(self, snapshot: InventorySnapshot) -> None:
        self._inventory = snapshot

    def clear_inventory_snapshot(self) -> None:
        self._inventory = None

    @property
    def has_explicit_inventory(self) -> bool:
        return self._inventory is not None

    # -------------------------------------------------------------------------
    # CSV
    # -------------------------------------------------------------------------

    def import_csv(self, text: str) -> int:
        """
        Append every parseable data line of a CSV payload.

        Returns the number of transactions appended.
        """
        return self.import_csv_detailed(text).imported_count

    def import_csv_detailed(self, text: str) -> CsvImportResult:
        """Like import_csv, but also reports the rejected lines."""
        result = decode_transactions(text)

        for row in result.rejected_rows:
            self._logger.warning(
                "csv_row_rejected",
                line_number=row.line_number,
                line=row.line,
                reason=row.reason,
            )

        if result.imported:
            self._transactions.extend(result.imported)
            self._notify()

        self._logger.info(
            "csv_imported",
            imported=result.imported_count,
            rejected=result.rejected_count,
            short_lines=result.short_lines,
        )
        return result

    def export_csv(self) -> str:
        """Header plus one line per transaction, no quoting."""
        return encode_transactions(self._transactions, self._currency_code)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: TotalsCallback) -> None:
        """Call `callback(totals)` after every mutation."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: TotalsCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        if not self._subscribers:
            return
        totals = self.totals()
        for callback in list(self._subscribers):
            callback(totals)
