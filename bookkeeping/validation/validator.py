"""
Two-Stage Validation of manual entries

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Required id present
- Amount parses as a non-negative number (currency prefix allowed)
- VAT rate parses as a whole number
- Any error here rejects the whole entry

STAGE 2 - SEMANTIC VALIDATION:
- Date shape (YYYY-MM-DD)
- VAT rate within the configured range
- Known transaction type
- Duplicate id in the ledger
- Only warnings; the ledger accepts these entries as they are

IMPORTANT: Validation NEVER silently fixes values beyond stripping the
currency prefix. It reports problems for the caller to show.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import ValidationError

from bookkeeping.config import get_settings
from bookkeeping.ledger import Ledger
from bookkeeping.ledger.csv_codec import MAX_AMOUNT_EXPONENT
from bookkeeping.models.transaction import (
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TransactionValidator:
    """
    Validates raw manual-entry fields through a two-stage pipeline.

    Stage 1: Schema validation (can run without a ledger)
    Stage 2: Semantic validation (uses the ledger for duplicate ids)
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        """
        Initialize validator.

        Args:
            ledger: Ledger used for duplicate id checks.
                    If None, duplicate checking is skipped.
        """
        self._ledger = ledger
        self._settings = get_settings().ledger

    def parse_amount(self, raw: Union[str, Decimal, int, float]) -> Decimal:
        """
        Parse an amount as typed by a user.

        The currency symbol is removed wherever it appears.

        Raises:
            ValueError: If what remains is not a finite number
        """
        if isinstance(raw, Decimal):
            amount = raw
        elif isinstance(raw, (int, float)):
            amount = Decimal(str(raw))
        else:
            text = str(raw).replace(self._settings.currency_symbol, "").strip()
            try:
                amount = Decimal(text)
            except InvalidOperation:
                raise ValueError(f"Invalid amount format: {raw!r}")

        if not amount.is_finite():
            raise ValueError(f"Invalid amount format: {raw!r}")
        if amount and amount.adjusted() > MAX_AMOUNT_EXPONENT:
            raise ValueError(f"Amount out of range: {raw!r}")
        return amount

    def _validate_schema(
        self,
        transaction_id: str,
        date: str,
        description: str,
        amount: Union[str, Decimal, int, float],
        type: Union[TransactionType, str],
        vat_rate: Union[int, str],
    ) -> tuple[Optional[Transaction], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (transaction_or_None, list_of_issues)
        """
        issues = []

        if not str(transaction_id).strip():
            issues.append(ValidationIssue(
                field="id",
                issue_type="missing",
                message="Transaction ID is required",
                severity="error",
                suggested_fix="Enter an ID such as TRX-004",
            ))

        parsed_amount = None
        try:
            parsed_amount = self.parse_amount(amount)
        except ValueError:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Invalid amount format",
                severity="error",
                suggested_fix="Enter a number such as 1250.50",
            ))
        else:
            if parsed_amount < 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="out_of_range",
                    message="Amount cannot be negative",
                    severity="error",
                    suggested_fix="Record money going out as an Expense",
                ))

        parsed_vat = None
        try:
            parsed_vat = int(vat_rate)
        except (TypeError, ValueError):
            issues.append(ValidationIssue(
                field="vat_rate",
                issue_type="invalid_format",
                message=f"Invalid VAT rate: {vat_rate!r}",
                severity="error",
                suggested_fix="Enter a whole percentage such as 15",
            ))

        if any(issue.severity == "error" for issue in issues):
            return None, issues

        try:
            transaction = Transaction(
                id=transaction_id,
                date=date,
                description=description,
                amount=parsed_amount,
                type=type,
                vat_rate=parsed_vat,
            )
        except ValidationError as e:
            for err in e.errors():
                issues.append(ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]) or "transaction",
                    issue_type="invalid_value",
                    message=err["msg"],
                    severity="error",
                ))
            return None, issues

        return transaction, issues

    def _validate_semantic(
        self,
        transaction: Transaction,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not DATE_PATTERN.match(transaction.date):
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date ({transaction.date!r}) is not in YYYY-MM-DD form",
                severity="warning",
                suggested_fix="Use a date such as 2023-10-01",
            ))

        low, high = self._settings.min_vat_rate, self._settings.max_vat_rate
        if not low <= transaction.vat_rate <= high:
            issues.append(ValidationIssue(
                field="vat_rate",
                issue_type="out_of_range",
                message=f"VAT rate {transaction.vat_rate}% is outside {low}-{high}%",
                severity="warning",
                suggested_fix="Please verify the VAT rate",
            ))

        if not isinstance(transaction.type, TransactionType):
            known = ", ".join(t.value for t in TransactionType)
            issues.append(ValidationIssue(
                field="type",
                issue_type="unknown_value",
                message=(
                    f"Type {transaction.type!r} is not one of {known}; "
                    "it will not count towards any total"
                ),
                severity="warning",
            ))

        if not transaction.description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is empty",
                severity="warning",
            ))

        if self._ledger is not None and self._ledger.find(transaction.id) is not None:
            issues.append(ValidationIssue(
                field="id",
                issue_type="potential_duplicate",
                message=f"A transaction with ID {transaction.id} already exists",
                severity="warning",
                suggested_fix="Deleting by ID removes the first match only",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate_entry(
        self,
        transaction_id: str,
        date: str,
        description: str,
        amount: Union[str, Decimal, int, float],
        type: Union[TransactionType, str],
        vat_rate: Union[int, str] = 0,
    ) -> ValidationResult:
        """
        Run full two-stage validation on raw entry fields.

        Returns:
            ValidationResult; `transaction` is set when stage 1 passed
        """
        all_issues = []

        transaction, schema_issues = self._validate_schema(
            transaction_id, date, description, amount, type, vat_rate,
        )
        all_issues.extend(schema_issues)
        schema_valid = transaction is not None

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if transaction is not None:
            semantic_valid, semantic_issues = self._validate_semantic(transaction)
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            transaction=transaction,
            issues=all_issues,
            warnings=warnings,
        )

    def summarize(self, result: ValidationResult) -> str:
        """Plain-text summary of a validation result."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if not result.schema_valid:
            lines.append("The entry could not be saved:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
