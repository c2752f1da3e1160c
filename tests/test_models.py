"""
Tests for the bookkeeping data models

Test strategy:
1. Unit tests for individual models (construction, constraints)
2. Derived properties are checked against hand-computed figures
3. No filesystem or ledger access in these tests
"""

import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from bookkeeping.models import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
    CsvImportResult,
    CsvRowError,
    FormulaId,
    FormulaResult,
    FormulaSection,
    FormulaUnit,
    Report,
    Transaction,
    TransactionType,
    User,
    ValidationIssue,
    ValidationResult,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        transaction = Transaction(
            id="TRX-001",
            date="2023-10-01",
            description="Office Supplies",
            amount=Decimal("1250.50"),
            type=TransactionType.EXPENSE,
            vat_rate=15,
        )
        assert transaction.id == "TRX-001"
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.amount == Decimal("1250.50")

    def test_type_string_becomes_enum(self):
        """Known type strings are coerced to TransactionType."""
        transaction = Transaction(id="A", date="2023-10-01", amount=10, type="Income")
        assert transaction.type is TransactionType.INCOME

    def test_unknown_type_is_kept(self):
        """Unknown types are stored as plain text."""
        transaction = Transaction(id="A", date="2023-10-01", amount=10, type="Transfer")
        assert transaction.type == "Transfer"
        assert not isinstance(transaction.type, TransactionType)
        assert transaction.type_label == "Transfer"

    def test_negative_amount_is_kept(self):
        """Test that refunds and corrections can carry a negative amount."""
        transaction = Transaction(id="A", date="2023-10-01", amount=Decimal("-1"), type="Expense")
        assert transaction.amount == Decimal("-1")

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity"])
    def test_rejects_non_finite_amount(self, amount):
        with pytest.raises(ValidationError):
            Transaction(id="A", date="2023-10-01", amount=Decimal(amount), type="Expense")

    def test_is_immutable(self):
        transaction = Transaction(id="A", date="2023-10-01", amount=10, type="Income")
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("20")

    def test_vat_amount(self):
        transaction = Transaction(
            id="A", date="2023-10-01", amount=Decimal("1250.50"), type="Expense", vat_rate=15,
        )
        assert transaction.vat_amount == Decimal("187.575")

    def test_defaults(self):
        transaction = Transaction(id="A", date="2023-10-01", amount=1, type="Income")
        assert transaction.description == ""
        assert transaction.vat_rate == 0


class TestUserModel:

    def test_password_hash_not_in_repr(self):
        user = User(username="user", full_name="Standard User", password_hash="secret-hash")
        assert "secret-hash" not in repr(user)

    def test_username_required(self):
        with pytest.raises(ValidationError):
            User(username="", full_name="Nobody", password_hash="x")


class TestValidationResult:
    """Tests for validation result model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Invalid amount format",
                    severity="error",
                ),
                ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="Odd date",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        result = ValidationResult(
            schema_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="vat_rate",
                    issue_type="out_of_range",
                    message="VAT rate 25% is outside 0-20%",
                    severity="warning",
                ),
            ],
            warnings=["VAT rate 25% is outside 0-20%"],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_constrained(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestCsvImportModels:

    def test_counts(self):
        result = CsvImportResult(
            imported=[Transaction(id="A", date="2023-10-01", amount=1, type="Income")],
            rejected_rows=[
                CsvRowError(line_number=3, line="bad", reason="Invalid amount: 'x'"),
                CsvRowError(line_number=4, line="worse", reason="Invalid amount: 'y'"),
            ],
            short_lines=1,
        )
        assert result.imported_count == 1
        assert result.rejected_count == 2

    def test_line_numbers_are_one_based(self):
        with pytest.raises(ValidationError):
            CsvRowError(line_number=0, line="", reason="")


class TestReportModels:

    def test_report_valid_by_default(self):
        report = Report(title="VAT REPORT", text="VAT REPORT")
        assert report.is_valid is True
        assert report.kind is None

    def test_formula_result_succeeded(self):
        ok = FormulaResult(
            formula_id=FormulaId.COGS,
            label="COGS",
            section=FormulaSection.INVENTORY,
            equation="COGS = Opening Inventory + Purchases - Closing Inventory",
            unit=FormulaUnit.CURRENCY,
            value=Decimal("6000"),
            display="R6,000.00",
        )
        failed = ok.model_copy(update={"value": None, "display": "Error in calculation", "error": "x"})
        assert ok.succeeded is True
        assert failed.succeeded is False

    def test_formula_ids_are_stable(self):
        assert FormulaId("break_even_sales") is FormulaId.BREAK_EVEN_SALES
        assert len(FormulaId) == 10


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        event = ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_DELETED,
            description="Deleted transaction: TRX-001",
        )
        assert event.severity == ActivitySeverity.INFO
        assert event.event_id is not None

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEventBuilder.csv_imported("october.csv", 12, 1)
        log_dict = event.to_log_dict()

        assert log_dict["event_type"] == "csv_imported"
        assert log_dict["entity_id"] == "october.csv"
        assert log_dict["details"] == {"imported": 12, "rejected": 1}

    def test_console_line_format(self):
        event = ActivityEvent(
            timestamp=datetime(2024, 1, 15, 9, 30, 5, tzinfo=timezone.utc),
            event_type=ActivityEventType.REPORT_GENERATED,
            description="Generated VAT report",
        )
        line = event.to_console_line()
        assert re.match(r"^\[\d{2}:\d{2}:\d{2}\] Generated VAT report$", line)

    def test_builder_transaction_added(self):
        event = ActivityEventBuilder.transaction_added(
            transaction_id="TRX-004",
            description="Rent",
            amount="R1,000.00",
            vat_rate=15,
        )
        assert event.description == "Added transaction: Rent (R1,000.00) with VAT 15%"
        assert event.is_user_action is True

    def test_builder_csv_row_rejected(self):
        event = ActivityEventBuilder.csv_row_rejected(3, "X,Y", "Invalid amount: 'Y'")
        assert event.severity == ActivitySeverity.WARNING
        assert event.description == "Error parsing line: X,Y"
        assert event.details["line_number"] == 3

    def test_builder_truncates_long_messages(self):
        event = ActivityEventBuilder.csv_row_rejected(2, "x" * 1000, "too long")
        assert len(event.description) == 500

    def test_builder_formula_failed(self):
        event = ActivityEventBuilder.formula_failed("Gross Profit Margin", "Sales revenue is zero")
        assert event.description == "Error calculating Gross Profit Margin: Sales revenue is zero"
