"""
Main Orchestrator for the bookkeeping engine

This module ties together all the components and defines the
end-to-end flows for:
1. Login (credentials → user)
2. Manual entry (raw fields → validate → add)
3. Import / export (file ↔ CSV payload ↔ ledger)
4. Reports and the formula sheet (ledger → text)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No ledger mutation without a logged-in user
- Every failure is reported to the caller, never swallowed
- Every user action shows up on the activity console
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional, Union

from bookkeeping.activity import ActivityLogger
from bookkeeping.auth import AuthenticationError, Authenticator
from bookkeeping.config import get_settings
from bookkeeping.data import sample_transactions
from bookkeeping.formulas import FormulaEvaluator
from bookkeeping.ledger import EntryValidationError, Ledger
from bookkeeping.models.report import FormulaResult, Report, ReportKind
from bookkeeping.models.transaction import (
    CsvImportResult,
    LedgerTotals,
    Transaction,
    TransactionType,
    User,
    ValidationResult,
)
from bookkeeping.reports import ReportGenerator, format_currency
from bookkeeping.services.storage import (
    CsvFileStorage,
    StorageError,
    TransactionStorageInterface,
)
from bookkeeping.validation import TransactionValidator


INVALID_CREDENTIALS = "Invalid username or password"


class LedgerSession:
    """
    One user's session over one ledger.

    Flow:
    1. login → the gate must pass before any mutation
    2. add / delete / import → ledger changes, totals recomputed on demand
    3. export / report / formulas → read-only views

    Single-threaded: each call completes before the next starts.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        authenticator: Optional[Authenticator] = None,
        storage: Optional[TransactionStorageInterface] = None,
        validator: Optional[TransactionValidator] = None,
        report_generator: Optional[ReportGenerator] = None,
        formula_evaluator: Optional[FormulaEvaluator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._ledger = ledger if ledger is not None else Ledger()
        self._authenticator = authenticator or Authenticator.from_seed()
        self._storage = storage or CsvFileStorage()
        self._validator = validator or TransactionValidator(self._ledger)
        self._reports = report_generator or ReportGenerator(self._ledger, clock=clock)
        self._formulas = formula_evaluator or FormulaEvaluator(self._ledger)
        self._activity = activity_logger or ActivityLogger()
        self._currency_symbol = get_settings().ledger.currency_symbol
        self._current_user: Optional[User] = None

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def activity(self) -> ActivityLogger:
        return self._activity

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    # -------------------------------------------------------------------------
    # Login gate
    # -------------------------------------------------------------------------

    def login(self, username: str, password: str) -> User:
        """
        Pass the login gate.

        Raises:
            AuthenticationError: If the credentials do not match
        """
        user = self._authenticator.authenticate(username, password)
        if user is None:
            self._activity.log_login_failed(username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        self._current_user = user
        self._activity.log_login_succeeded(user.username, user.full_name)
        return user

    def logout(self) -> None:
        if self._current_user is not None:
            self._activity.log_logged_out(self._current_user.username)
        self._current_user = None

    def _require_user(self) -> User:
        if self._current_user is None:
            raise AuthenticationError("Login required")
        return self._current_user

    # -------------------------------------------------------------------------
    # Ledger mutations
    # -------------------------------------------------------------------------

    def add_entry(
        self,
        transaction_id: str,
        date: str,
        description: str,
        amount: Union[str, Decimal, int, float],
        type: Union[TransactionType, str],
        vat_rate: Union[int, str] = 0,
    ) -> ValidationResult:
        """
        Validate raw entry fields and add the transaction.

        Warnings do not block the add; they are returned to the caller.

        Raises:
            AuthenticationError: If nobody is logged in
            EntryValidationError: If the entry fails schema validation
        """
        self._require_user()

        result = self._validator.validate_entry(
            transaction_id=transaction_id,
            date=date,
            description=description,
            amount=amount,
            type=type,
            vat_rate=vat_rate,
        )

        if result.transaction is None:
            issues = [
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in result.issues
                if i.severity == "error"
            ]
            self._activity.log_entry_rejected(issues)
            raise EntryValidationError(
                self._validator.summarize(result),
                issues=result.issues,
            )

        transaction = result.transaction
        self._ledger.add(transaction)
        self._activity.log_transaction_added(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=format_currency(transaction.amount, self._currency_symbol),
            vat_rate=transaction.vat_rate,
        )
        return result

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """
        Delete by id.

        Raises:
            NotFoundError: If no transaction has this id
        """
        self._require_user()
        removed = self._ledger.remove(transaction_id)
        self._activity.log_transaction_deleted(removed.id)
        return removed

    def delete_selected(self, index: Optional[int]) -> Transaction:
        """
        Delete by display position.

        Raises:
            OutOfRangeError: If nothing is selected or the index is invalid
        """
        self._require_user()
        removed = self._ledger.remove_at(index)
        self._activity.log_transaction_deleted(removed.id)
        return removed

    def load_sample_data(self) -> int:
        """Append the sample transactions. Returns how many were added."""
        samples = sample_transactions()
        for transaction in samples:
            self._ledger.add(transaction)
        self._activity.log_sample_data_loaded(len(samples))
        return len(samples)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def import_file(self, path: Union[str, Path]) -> CsvImportResult:
        """
        Import every parseable line of a CSV file.

        A read failure leaves the ledger unchanged.

        Raises:
            StorageReadError: If the file cannot be read
        """
        self._require_user()
        filename = Path(path).name

        try:
            text = self._storage.read_text(path)
        except StorageError as e:
            self._activity.log_import_failed(filename, str(e))
            raise

        result = self._ledger.import_csv_detailed(text)

        for row in result.rejected_rows:
            self._activity.log_csv_row_rejected(row.line_number, row.line, row.reason)
        self._activity.log_csv_imported(filename, result.imported_count, result.rejected_count)

        return result

    def export_file(self, path: Union[str, Path]) -> Path:
        """
        Export the ledger as CSV.

        Returns:
            The path written (.csv appended when missing)

        Raises:
            StorageWriteError: If the file cannot be written; any previous
                               file at that path is left untouched
        """
        self._require_user()

        try:
            written = self._storage.write_text(path, self._ledger.export_csv())
        except StorageError as e:
            self._activity.log_export_failed(e.path.name, str(e))
            raise

        self._activity.log_csv_exported(written.name, len(self._ledger))
        return written

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def totals(self) -> LedgerTotals:
        return self._ledger.totals()

    def generate_report(
        self,
        kind: Union[ReportKind, str],
        strict: bool = False,
    ) -> Report:
        """
        Raises:
            InvalidReportKindError: If strict and the kind is unknown
        """
        report = self._reports.generate(kind, strict=strict)
        label = kind.value if isinstance(kind, ReportKind) else str(kind)
        self._activity.log_report_generated(label)
        return report

    def calculate_all(self) -> list[FormulaResult]:
        """Evaluate the whole formula sheet."""
        results = self._formulas.evaluate_all()

        failed = [r for r in results if not r.succeeded]
        for result in failed:
            self._activity.log_formula_failed(result.label, result.error or "")
        self._activity.log_formulas_calculated(len(results) - len(failed), len(failed))

        return results


def create_app_components(
    with_sample_data: bool = True,
    clock: Optional[Callable[[], date]] = None,
) -> LedgerSession:
    """
    Factory function to create a ready-to-use session.

    Args:
        with_sample_data: Seed the ledger with the sample transactions.
        clock: Date source for report stamps (defaults to today).

    Returns:
        A LedgerSession waiting for login
    """
    session = LedgerSession(clock=clock)
    if with_sample_data:
        session.load_sample_data()
    return session


__all__ = [
    "INVALID_CREDENTIALS",
    "LedgerSession",
    "create_app_components",
]
