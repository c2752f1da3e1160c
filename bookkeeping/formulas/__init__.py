"""Accounting formulas package."""

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
from bookkeeping.formulas.evaluator import (
    ERROR_DISPLAY,
    FORMULAS,
    FormulaEvaluator,
    FormulaInputs,
)

__all__ = [
    "ERROR_DISPLAY",
    "FORMULAS",
    "FormulaError",
    "FormulaEvaluator",
    "FormulaInputs",
    "calculate_ar_turnover",
    "calculate_assets",
    "calculate_average_inventory",
    "calculate_break_even_sales",
    "calculate_cogs",
    "calculate_gross_profit",
    "calculate_gross_profit_margin",
    "calculate_inventory_turnover",
    "calculate_markup_percentage",
    "calculate_net_income",
    "calculate_net_profit_margin",
]
