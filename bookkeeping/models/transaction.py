"""
Core Data Models for the ledger

These models define the schemas for all data flowing through the ledger.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Stay immutable once created (transactions are never edited in place)

DESIGN DECISION: Amounts are Decimal, never float.
The VAT figures in reports must add up to the cent.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Transaction classification.

    Only these three types feed the aggregates. A transaction carrying
    any other type string is kept, shown and exported, but counted nowhere.
    """
    INCOME = "Income"
    EXPENSE = "Expense"
    INVENTORY = "Inventory"


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry.

    Transactions are created by a manual add or by CSV import,
    removed by an explicit delete, and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Caller-assigned identifier (uniqueness is not enforced)"
    )
    date: str = Field(
        ...,
        description="Date as YYYY-MM-DD text; not checked against a calendar"
    )
    description: str = Field(
        default="",
        description="Free text description"
    )
    amount: Decimal = Field(
        ...,
        description="Amount in the ledger currency"
    )
    type: Union[TransactionType, str] = Field(
        ...,
        union_mode="left_to_right",
        description="Income, Expense or Inventory; anything else is inert"
    )
    vat_rate: int = Field(
        default=0,
        description="VAT percentage (0-20 by convention, never clamped)"
    )

    @property
    def type_label(self) -> str:
        """The type as plain text, whether or not it is a known type."""
        if isinstance(self.type, TransactionType):
            return self.type.value
        return self.type

    @property
    def vat_amount(self) -> Decimal:
        """VAT carried by this entry (amount * rate / 100)."""
        return self.amount * self.vat_rate / 100


class LedgerTotals(BaseModel):
    """Aggregates over the whole ledger, recomputed on every query."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    total_vat: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")


class InventorySnapshot(BaseModel):
    """
    Inventory figures used by the COGS based formulas.

    Either set explicitly on the ledger or derived from Inventory
    transactions whose descriptions mention Opening, Purchase or Closing.
    """
    model_config = ConfigDict(frozen=True)

    opening: Decimal = Decimal("0")
    purchases: Decimal = Decimal("0")
    closing: Decimal = Decimal("0")


class User(BaseModel):
    """
    A user allowed through the login gate.

    Only the password hash is kept; the plaintext never leaves the
    authenticator.
    """
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    full_name: str
    password_hash: str = Field(..., repr=False)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation of a manual entry.

    Stage 1: Schema validation (fields parse into a Transaction)
    Stage 2: Semantic validation (conventions and duplicates)
    """

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool

    # Present only when stage 1 passed
    transaction: Optional[Transaction] = None

    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# CSV IMPORT MODELS
# =============================================================================

class CsvRowError(BaseModel):
    """A CSV line that could not be turned into a transaction."""

    line_number: int = Field(..., ge=1, description="1-based line number in the payload")
    line: str
    reason: str


class CsvImportResult(BaseModel):
    """Outcome of importing one CSV payload."""

    imported: list[Transaction] = Field(default_factory=list)
    rejected_rows: list[CsvRowError] = Field(default_factory=list)
    short_lines: int = Field(
        default=0,
        ge=0,
        description="Lines skipped for having fewer than six fields"
    )

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected_rows)
