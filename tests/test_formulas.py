"""
Tests for the accounting formulas

1. The pure formula functions
2. The formula sheet evaluated against a ledger
"""

from decimal import Decimal

import pytest

from bookkeeping.config import FormulaSettings
from bookkeeping.formulas import (
    ERROR_DISPLAY,
    FORMULAS,
    FormulaError,
    FormulaEvaluator,
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
from bookkeeping.models import FormulaId, FormulaSection, InventorySnapshot


class TestCalculations:

    def test_net_income(self):
        assert calculate_net_income(Decimal("8500"), Decimal("4451.25")) == Decimal("4048.75")

    def test_float_inputs_are_exact(self):
        assert calculate_net_income(0.3, 0.1) == Decimal("0.2")

    def test_cogs(self):
        assert calculate_cogs(5000, 3000, 2000) == Decimal("6000")

    def test_gross_profit(self):
        assert calculate_gross_profit(8500, 6000) == Decimal("2500")

    def test_margins(self):
        assert calculate_gross_profit_margin(2500, 10000) == Decimal("25")
        assert calculate_net_profit_margin(1000, 4000) == Decimal("25")

    def test_markup(self):
        assert calculate_markup_percentage(100, 150) == Decimal("50")

    def test_average_inventory(self):
        assert calculate_average_inventory(5000, 2000) == Decimal("3500")

    def test_turnovers(self):
        assert calculate_inventory_turnover(7000, 3500) == Decimal("2")
        assert calculate_ar_turnover(6800, 2000) == Decimal("3.4")

    def test_break_even(self):
        assert calculate_break_even_sales(5000, 50, 30) == Decimal("250")

    def test_assets(self):
        assert calculate_assets(10000, 15000) == Decimal("25000")

    @pytest.mark.parametrize("call", [
        lambda: calculate_gross_profit_margin(100, 0),
        lambda: calculate_net_profit_margin(100, 0),
        lambda: calculate_markup_percentage(0, 10),
        lambda: calculate_inventory_turnover(100, 0),
        lambda: calculate_ar_turnover(100, 0),
        lambda: calculate_break_even_sales(5000, 30, 30),
    ])
    def test_zero_denominator_raises(self, call):
        with pytest.raises(FormulaError):
            call()

    def test_error_message_names_the_denominator(self):
        with pytest.raises(FormulaError, match="Sales revenue is zero"):
            calculate_gross_profit_margin(1, 0)


class TestFormulaSheet:

    def _displays(self, ledger, **kwargs):
        results = FormulaEvaluator(ledger, **kwargs).evaluate_all()
        return {r.formula_id: r.display for r in results}

    def test_sheet_order(self, sample_ledger):
        results = FormulaEvaluator(sample_ledger).evaluate_all()
        assert [r.formula_id for r in results] == [f.formula_id for f in FORMULAS]
        assert results[0].section == FormulaSection.INCOME
        assert results[-1].section == FormulaSection.EQUATION

    def test_sample_ledger_values(self, sample_ledger):
        displays = self._displays(sample_ledger)
        assert displays[FormulaId.NET_INCOME] == "R4,048.75"
        assert displays[FormulaId.GROSS_PROFIT] == "R2,500.00"
        assert displays[FormulaId.GROSS_PROFIT_MARGIN] == "29.41%"
        assert displays[FormulaId.NET_PROFIT_MARGIN] == "47.63%"
        assert displays[FormulaId.MARKUP_PERCENTAGE] == "50.00%"
        assert displays[FormulaId.COGS] == "R6,000.00"
        assert displays[FormulaId.INVENTORY_TURNOVER] == "1.71"
        assert displays[FormulaId.AR_TURNOVER] == "3.40"
        assert displays[FormulaId.BREAK_EVEN_SALES] == "250.00 units"
        assert displays[FormulaId.ASSETS] == "R25,000.00"

    def test_all_succeed_on_sample(self, sample_ledger):
        assert all(r.succeeded for r in FormulaEvaluator(sample_ledger).evaluate_all())

    def test_empty_ledger_reports_errors_and_continues(self, empty_ledger):
        results = FormulaEvaluator(empty_ledger).evaluate_all()
        failed = {r.formula_id for r in results if not r.succeeded}

        assert failed == {
            FormulaId.GROSS_PROFIT_MARGIN,
            FormulaId.NET_PROFIT_MARGIN,
            FormulaId.INVENTORY_TURNOVER,
        }
        for result in results:
            if not result.succeeded:
                assert result.display == ERROR_DISPLAY
                assert result.value is None
                assert result.error

        assert len(results) == len(FORMULAS)

    def test_explicit_inventory_snapshot(self, sample_ledger):
        sample_ledger.set_inventory_snapshot(
            InventorySnapshot(opening=Decimal("1000"), purchases=Decimal("500"), closing=Decimal("500"))
        )
        result = FormulaEvaluator(sample_ledger).evaluate(FormulaId.COGS)
        assert result.value == Decimal("1000")

    def test_evaluate_by_string_id(self, sample_ledger):
        result = FormulaEvaluator(sample_ledger).evaluate("break_even_sales")
        assert result.value == Decimal("250")

    def test_custom_assumptions(self, sample_ledger):
        assumptions = FormulaSettings(cost_price=Decimal("0"))
        result = FormulaEvaluator(sample_ledger, assumptions=assumptions).evaluate(
            FormulaId.MARKUP_PERCENTAGE
        )
        assert not result.succeeded
        assert result.error == "Cost price is zero"

    def test_assumptions_from_environment(self, monkeypatch, sample_ledger):
        monkeypatch.setenv("FORMULA_FIXED_COSTS", "10000")
        displays = self._displays(sample_ledger)
        assert displays[FormulaId.BREAK_EVEN_SALES] == "500.00 units"

    def test_sheet_follows_the_ledger(self, sample_ledger):
        evaluator = FormulaEvaluator(sample_ledger)
        sample_ledger.remove("TRX-002")
        assert not evaluator.evaluate(FormulaId.GROSS_PROFIT_MARGIN).succeeded
