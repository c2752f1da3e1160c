"""
Report Generator

DESIGN DECISION: Reports are read-only views.
They are computed from the ledger totals at the moment of the request
and never touch ledger state.

The text layout is fixed; the presentation layer only displays it.
"""

from datetime import date
from typing import Callable, Optional, Union

from bookkeeping.config import get_settings
from bookkeeping.ledger import Ledger, LedgerError
from bookkeeping.models.report import Report, ReportKind
from bookkeeping.models.transaction import LedgerTotals, TransactionType
from bookkeeping.reports.formatting import format_currency


INVALID_REPORT_TEXT = "Invalid report type"
RULE = "================"


class InvalidReportKindError(LedgerError):
    """Report kind is not one of Income, Expense, Summary or VAT."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"{INVALID_REPORT_TEXT}: {kind!r}")


class ReportGenerator:
    """
    Renders the canned reports for a ledger.

    GUARANTEES:
    - Figures come from Ledger.totals() at generation time
    - An unknown kind yields an invalid Report, not an exception,
      unless strict generation is requested
    """

    def __init__(
        self,
        ledger: Ledger,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._ledger = ledger
        self._clock = clock or date.today
        self._settings = get_settings().ledger

    @staticmethod
    def parse_kind(kind: Union[ReportKind, str]) -> Optional[ReportKind]:
        """The ReportKind for an enum member or its value, else None."""
        if isinstance(kind, ReportKind):
            return kind
        try:
            return ReportKind(kind)
        except ValueError:
            return None

    def generate(
        self,
        kind: Union[ReportKind, str],
        strict: bool = False,
    ) -> Report:
        """
        Generate a report.

        Raises:
            InvalidReportKindError: If strict and the kind is unknown
        """
        report_kind = self.parse_kind(kind)
        if report_kind is None:
            if strict:
                raise InvalidReportKindError(kind)
            return Report(
                title=INVALID_REPORT_TEXT,
                text=INVALID_REPORT_TEXT,
                is_valid=False,
            )

        today = self._clock()
        totals = self._ledger.totals()

        if report_kind == ReportKind.INCOME:
            title, lines = self._income_lines(totals)
        elif report_kind == ReportKind.EXPENSE:
            title, lines = self._expense_lines(totals)
        elif report_kind == ReportKind.SUMMARY:
            title, lines = self._summary_lines(totals)
        else:
            title, lines = self._vat_lines(totals)

        lines.append(f"Generated on: {today.strftime(self._settings.report_date_format)}")

        return Report(
            kind=report_kind,
            title=title,
            text="\n".join([title, RULE] + lines),
            generated_on=today,
        )

    def _money(self, value) -> str:
        return format_currency(value, self._settings.currency_symbol)

    def _income_lines(self, totals: LedgerTotals) -> tuple[str, list[str]]:
        return "INCOME REPORT", [
            f"Total Income: {self._money(totals.total_income)}",
            f"Number of Transactions: {self._ledger.count(TransactionType.INCOME)}",
        ]

    def _expense_lines(self, totals: LedgerTotals) -> tuple[str, list[str]]:
        return "EXPENSE REPORT", [
            f"Total Expenses: {self._money(totals.total_expense)}",
            f"Number of Transactions: {self._ledger.count(TransactionType.EXPENSE)}",
        ]

    def _summary_lines(self, totals: LedgerTotals) -> tuple[str, list[str]]:
        return "FINANCIAL SUMMARY", [
            f"Total Income: {self._money(totals.total_income)}",
            f"Total Expenses: {self._money(totals.total_expense)}",
            f"Net Balance: {self._money(totals.net_balance)}",
        ]

    def _vat_lines(self, totals: LedgerTotals) -> tuple[str, list[str]]:
        return "VAT REPORT", [
            f"Total VAT Collected: {self._money(totals.total_vat)}",
        ]
