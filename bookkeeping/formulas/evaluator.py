"""
Formula Sheet Evaluator

Evaluates every formula on the formula sheet against a ledger.

Inputs come from two places:
- the ledger: income and expense totals, inventory snapshot
- configuration: the figures the ledger does not track
  (unit prices, receivables, liabilities, equity)

DESIGN DECISION: Each formula is identified by a FormulaId and maps to a
function of a FormulaInputs record. Labels and equation text are for
display only.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from bookkeeping.activity import get_logger
from bookkeeping.config import FormulaSettings, get_settings
from bookkeeping.formulas.calculations import (
    FormulaError,
    calculate_ar_turnover,
    calculate_assets,
    calculate_average_inventory,
    calculate_break_even_sales,
    calculate_cogs,
    calculate_gross_profit,
    calculate_gross_profit_margin,
    calculate_inventory_turnover,
    calculate_markup_percentage,
    calculate_net_income,
    calculate_net_profit_margin,
)
from bookkeeping.ledger import Ledger
from bookkeeping.models.report import (
    FormulaId,
    FormulaResult,
    FormulaSection,
    FormulaUnit,
)
from bookkeeping.reports.formatting import (
    format_currency,
    format_number,
    format_percent,
    format_units,
)


ERROR_DISPLAY = "Error in calculation"


@dataclass(frozen=True)
class FormulaInputs:
    """Everything a formula may read, gathered once per evaluation."""

    total_revenue: Decimal
    total_expenses: Decimal
    sales_revenue: Decimal
    opening_inventory: Decimal
    purchases: Decimal
    closing_inventory: Decimal
    assumptions: FormulaSettings

    @property
    def cogs(self) -> Decimal:
        return calculate_cogs(self.opening_inventory, self.purchases, self.closing_inventory)

    @property
    def net_credit_sales(self) -> Decimal:
        return self.sales_revenue * self.assumptions.credit_sales_ratio


@dataclass(frozen=True)
class FormulaDefinition:
    formula_id: FormulaId
    label: str
    section: FormulaSection
    equation: str
    unit: FormulaUnit
    compute: Callable[[FormulaInputs], Decimal]


def _gross_profit(i: FormulaInputs) -> Decimal:
    return calculate_gross_profit(i.sales_revenue, i.cogs)


def _net_income(i: FormulaInputs) -> Decimal:
    return calculate_net_income(i.total_revenue, i.total_expenses)


def _inventory_turnover(i: FormulaInputs) -> Decimal:
    average = calculate_average_inventory(i.opening_inventory, i.closing_inventory)
    return calculate_inventory_turnover(i.cogs, average)


FORMULAS: tuple[FormulaDefinition, ...] = (
    FormulaDefinition(
        FormulaId.NET_INCOME,
        "Net Income",
        FormulaSection.INCOME,
        "Net Income = Total Revenue - Total Expenses",
        FormulaUnit.CURRENCY,
        _net_income,
    ),
    FormulaDefinition(
        FormulaId.GROSS_PROFIT,
        "Gross Profit",
        FormulaSection.PROFIT,
        "Gross Profit = Sales Revenue - Cost of Goods Sold (COGS)",
        FormulaUnit.CURRENCY,
        _gross_profit,
    ),
    FormulaDefinition(
        FormulaId.GROSS_PROFIT_MARGIN,
        "Gross Profit Margin",
        FormulaSection.PROFIT,
        "Gross Profit Margin = (Gross Profit / Sales Revenue) × 100",
        FormulaUnit.PERCENT,
        lambda i: calculate_gross_profit_margin(_gross_profit(i), i.sales_revenue),
    ),
    FormulaDefinition(
        FormulaId.NET_PROFIT_MARGIN,
        "Net Profit Margin",
        FormulaSection.PROFIT,
        "Net Profit Margin = (Net Profit / Total Revenue) × 100",
        FormulaUnit.PERCENT,
        lambda i: calculate_net_profit_margin(_net_income(i), i.total_revenue),
    ),
    FormulaDefinition(
        FormulaId.MARKUP_PERCENTAGE,
        "Markup %",
        FormulaSection.PROFIT,
        "Markup % = [(Selling Price - Cost Price) / Cost Price] × 100",
        FormulaUnit.PERCENT,
        lambda i: calculate_markup_percentage(
            i.assumptions.cost_price, i.assumptions.selling_price
        ),
    ),
    FormulaDefinition(
        FormulaId.COGS,
        "COGS",
        FormulaSection.INVENTORY,
        "COGS = Opening Inventory + Purchases - Closing Inventory",
        FormulaUnit.CURRENCY,
        lambda i: i.cogs,
    ),
    FormulaDefinition(
        FormulaId.INVENTORY_TURNOVER,
        "Inventory Turnover",
        FormulaSection.INVENTORY,
        "Inventory Turnover = Cost of Goods Sold / Average Inventory",
        FormulaUnit.RATIO,
        _inventory_turnover,
    ),
    FormulaDefinition(
        FormulaId.AR_TURNOVER,
        "AR Turnover",
        FormulaSection.RATIOS,
        "AR Turnover = Net Credit Sales / Average Accounts Receivable",
        FormulaUnit.RATIO,
        lambda i: calculate_ar_turnover(
            i.net_credit_sales, i.assumptions.average_accounts_receivable
        ),
    ),
    FormulaDefinition(
        FormulaId.BREAK_EVEN_SALES,
        "Break-Even Sales",
        FormulaSection.BUSINESS,
        "Break-Even Sales = Fixed Costs / (Selling Price per Unit - Variable Cost per Unit)",
        FormulaUnit.UNITS,
        lambda i: calculate_break_even_sales(
            i.assumptions.fixed_costs,
            i.assumptions.selling_price_per_unit,
            i.assumptions.variable_cost_per_unit,
        ),
    ),
    FormulaDefinition(
        FormulaId.ASSETS,
        "Assets",
        FormulaSection.EQUATION,
        "Assets = Liabilities + Owner's Equity",
        FormulaUnit.CURRENCY,
        lambda i: calculate_assets(i.assumptions.liabilities, i.assumptions.owners_equity),
    ),
)

FORMULAS_BY_ID: dict[FormulaId, FormulaDefinition] = {f.formula_id: f for f in FORMULAS}


class FormulaEvaluator:
    """
    Evaluates the formula sheet against a ledger.

    A formula that fails is reported as an error result; the remaining
    formulas are still evaluated.
    """

    def __init__(
        self,
        ledger: Ledger,
        assumptions: Optional[FormulaSettings] = None,
    ):
        self._ledger = ledger
        self._assumptions = assumptions or get_settings().formulas
        self._currency_symbol = get_settings().ledger.currency_symbol
        self._logger = get_logger("bookkeeping.formulas")

    def gather_inputs(self) -> FormulaInputs:
        """Collect ledger figures and assumptions for one evaluation."""
        totals = self._ledger.totals()
        inventory = self._ledger.inventory_snapshot()
        return FormulaInputs(
            total_revenue=totals.total_income,
            total_expenses=totals.total_expense,
            sales_revenue=totals.total_income,
            opening_inventory=inventory.opening,
            purchases=inventory.purchases,
            closing_inventory=inventory.closing,
            assumptions=self._assumptions,
        )

    def evaluate(
        self,
        formula_id: FormulaId,
        inputs: Optional[FormulaInputs] = None,
    ) -> FormulaResult:
        """Evaluate a single formula."""
        definition = FORMULAS_BY_ID[FormulaId(formula_id)]
        if inputs is None:
            inputs = self.gather_inputs()

        try:
            value = definition.compute(inputs)
        except FormulaError as e:
            self._logger.warning(
                "formula_failed",
                formula=definition.formula_id.value,
                error=str(e),
            )
            return self._result(definition, value=None, display=ERROR_DISPLAY, error=str(e))

        return self._result(definition, value=value, display=self.format_value(definition.unit, value))

    def evaluate_all(self) -> list[FormulaResult]:
        """Evaluate every formula, in sheet order."""
        inputs = self.gather_inputs()
        return [self.evaluate(definition.formula_id, inputs) for definition in FORMULAS]

    def format_value(self, unit: FormulaUnit, value: Decimal) -> str:
        if unit == FormulaUnit.CURRENCY:
            return format_currency(value, self._currency_symbol)
        if unit == FormulaUnit.PERCENT:
            return format_percent(value)
        if unit == FormulaUnit.UNITS:
            return format_units(value)
        return format_number(value)

    @staticmethod
    def _result(
        definition: FormulaDefinition,
        value: Optional[Decimal],
        display: str,
        error: Optional[str] = None,
    ) -> FormulaResult:
        return FormulaResult(
            formula_id=definition.formula_id,
            label=definition.label,
            section=definition.section,
            equation=definition.equation,
            unit=definition.unit,
            value=value,
            display=display,
            error=error,
        )
