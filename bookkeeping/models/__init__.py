"""
Data Models Package

This package contains all Pydantic models used by the bookkeeping engine.
All data flowing through the ledger must conform to these schemas.
"""

from bookkeeping.models.transaction import (
    CsvImportResult,
    CsvRowError,
    InventorySnapshot,
    LedgerTotals,
    Transaction,
    TransactionType,
    User,
    ValidationIssue,
    ValidationResult,
)
from bookkeeping.models.report import (
    FormulaId,
    FormulaResult,
    FormulaSection,
    FormulaUnit,
    Report,
    ReportKind,
)
from bookkeeping.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "CsvImportResult",
    "CsvRowError",
    "InventorySnapshot",
    "LedgerTotals",
    "Transaction",
    "TransactionType",
    "User",
    "ValidationIssue",
    "ValidationResult",
    # Report models
    "FormulaId",
    "FormulaResult",
    "FormulaSection",
    "FormulaUnit",
    "Report",
    "ReportKind",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
