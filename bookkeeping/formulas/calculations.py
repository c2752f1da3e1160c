"""
Accounting formulas.

Pure functions of scalar inputs. They never look at the ledger.

Division by zero raises FormulaError; a zero denominator never turns
into an infinite or undefined number.
"""

from decimal import Decimal
from typing import Union

from bookkeeping.ledger.errors import LedgerError


Number = Union[Decimal, int, float, str]

HUNDRED = Decimal("100")


class FormulaError(LedgerError):
    """A formula could not be evaluated (zero denominator)."""
    pass


def _d(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _divide(numerator: Decimal, denominator: Decimal, what: str) -> Decimal:
    if denominator == 0:
        raise FormulaError(f"{what} is zero")
    return numerator / denominator


def calculate_net_income(total_revenue: Number, total_expenses: Number) -> Decimal:
    return _d(total_revenue) - _d(total_expenses)


def calculate_gross_profit(sales_revenue: Number, cogs: Number) -> Decimal:
    return _d(sales_revenue) - _d(cogs)


def calculate_cogs(
    opening_inventory: Number,
    purchases: Number,
    closing_inventory: Number,
) -> Decimal:
    """Cost of goods sold: opening + purchases - closing."""
    return _d(opening_inventory) + _d(purchases) - _d(closing_inventory)


def calculate_gross_profit_margin(gross_profit: Number, sales_revenue: Number) -> Decimal:
    return _divide(_d(gross_profit), _d(sales_revenue), "Sales revenue") * HUNDRED


def calculate_net_profit_margin(net_income: Number, total_revenue: Number) -> Decimal:
    return _divide(_d(net_income), _d(total_revenue), "Total revenue") * HUNDRED


def calculate_markup_percentage(cost_price: Number, selling_price: Number) -> Decimal:
    cost = _d(cost_price)
    return _divide(_d(selling_price) - cost, cost, "Cost price") * HUNDRED


def calculate_average_inventory(opening_inventory: Number, closing_inventory: Number) -> Decimal:
    return (_d(opening_inventory) + _d(closing_inventory)) / 2


def calculate_inventory_turnover(cogs: Number, average_inventory: Number) -> Decimal:
    return _divide(_d(cogs), _d(average_inventory), "Average inventory")


def calculate_ar_turnover(
    net_credit_sales: Number,
    average_accounts_receivable: Number,
) -> Decimal:
    return _divide(
        _d(net_credit_sales),
        _d(average_accounts_receivable),
        "Average accounts receivable",
    )


def calculate_break_even_sales(
    fixed_costs: Number,
    selling_price_per_unit: Number,
    variable_cost_per_unit: Number,
) -> Decimal:
    """Units to sell before contribution covers fixed costs."""
    margin = _d(selling_price_per_unit) - _d(variable_cost_per_unit)
    return _divide(_d(fixed_costs), margin, "Contribution margin per unit")


def calculate_assets(liabilities: Number, owners_equity: Number) -> Decimal:
    return _d(liabilities) + _d(owners_equity)
