"""
Report and Formula Models

Reports and formula results are read-only views over the ledger.
They are produced on request and never stored.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ReportKind(str, Enum):
    """The canned reports."""
    INCOME = "Income"
    EXPENSE = "Expense"
    SUMMARY = "Summary"
    VAT = "VAT"


class Report(BaseModel):
    """
    A rendered report.

    An unrecognized report kind yields a Report with is_valid=False
    rather than an exception, unless strict generation was requested.
    """

    kind: Optional[ReportKind] = None
    title: str
    text: str
    generated_on: Optional[date] = None
    is_valid: bool = True


class FormulaId(str, Enum):
    """
    Closed set of formulas on the formula sheet.

    DESIGN DECISION: Dispatch is keyed on these identifiers,
    never on the display label of a formula.
    """
    NET_INCOME = "net_income"
    GROSS_PROFIT = "gross_profit"
    GROSS_PROFIT_MARGIN = "gross_profit_margin"
    NET_PROFIT_MARGIN = "net_profit_margin"
    MARKUP_PERCENTAGE = "markup_percentage"
    COGS = "cogs"
    INVENTORY_TURNOVER = "inventory_turnover"
    AR_TURNOVER = "ar_turnover"
    BREAK_EVEN_SALES = "break_even_sales"
    ASSETS = "assets"


class FormulaSection(str, Enum):
    """Grouping used when laying out the formula sheet."""
    INCOME = "Income Calculations"
    PROFIT = "Profit Calculations"
    INVENTORY = "Inventory Calculations"
    RATIOS = "Financial Ratios"
    BUSINESS = "Business Metrics"
    EQUATION = "Accounting Equation"


class FormulaUnit(str, Enum):
    """How a formula value is displayed."""
    CURRENCY = "currency"
    PERCENT = "percent"
    RATIO = "ratio"
    UNITS = "units"


class FormulaResult(BaseModel):
    """Outcome of evaluating one formula against the ledger."""

    formula_id: FormulaId
    label: str
    section: FormulaSection
    equation: str
    unit: FormulaUnit
    value: Optional[Decimal] = None
    display: str = Field(
        ...,
        description="Formatted value, or an error marker"
    )
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
