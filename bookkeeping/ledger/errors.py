"""
Ledger exceptions.

Every error raised by the engine derives from LedgerError, so a caller
at the boundary can recover from any of them without catching broadly.
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class EntryValidationError(LedgerError):
    """A manual entry could not be turned into a transaction."""

    def __init__(self, message: str, issues: Optional[list] = None):
        self.issues = issues or []
        super().__init__(message)


class OutOfRangeError(LedgerError):
    """Delete by position with no selection or an invalid index."""

    def __init__(self, index: Optional[int], size: int):
        self.index = index
        self.size = size
        if index is None:
            message = "No transaction selected"
        else:
            message = f"No transaction at position {index} (ledger holds {size})"
        super().__init__(message)


class NotFoundError(LedgerError):
    """Delete by id for an id the ledger does not hold."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")
