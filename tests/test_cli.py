"""Tests for the command line interface."""

from typer.testing import CliRunner

from bookkeeping.cli import app

runner = CliRunner()

GOOD_CSV = (
    "ID,Date,Description,Amount (ZAR),Type,VAT Rate\n"
    "TRX-010,2023-11-01,Consulting,2000.00,Income,0\n"
    "TRX-011,2023-11-02,Fuel,500.00,Expense,15\n"
)

BAD_CSV = GOOD_CSV + "TRX-012,2023-11-03,Broken,abc,Expense,15\n"


class TestCli:

    def test_totals_sample(self):
        result = runner.invoke(app, ["totals", "--sample"])
        assert result.exit_code == 0
        assert "Total Income: R8,500.00" in result.output
        assert "Total VAT: R667.69" in result.output
        assert "Net Balance: R4,048.75" in result.output

    def test_totals_from_file(self, csv_file):
        result = runner.invoke(app, ["totals", "--input", str(csv_file(GOOD_CSV))])
        assert result.exit_code == 0
        assert "Total Income: R2,000.00" in result.output
        assert "Total VAT: R75.00" in result.output

    def test_needs_a_source(self):
        result = runner.invoke(app, ["totals"])
        assert result.exit_code == 1

    def test_missing_input_file(self, tmp_path):
        result = runner.invoke(app, ["totals", "--input", str(tmp_path / "missing.csv")])
        assert result.exit_code == 1

    def test_report(self):
        result = runner.invoke(app, ["report", "Summary", "--sample"])
        assert result.exit_code == 0
        assert "FINANCIAL SUMMARY" in result.output
        assert "Net Balance: R4,048.75" in result.output

    def test_invalid_report(self):
        result = runner.invoke(app, ["report", "Cashflow", "--sample"])
        assert result.exit_code == 2

    def test_formulas(self):
        result = runner.invoke(app, ["formulas", "--sample"])
        assert result.exit_code == 0
        assert "Profit Calculations" in result.output
        assert "Break-Even Sales: 250.00 units" in result.output
        assert "Gross Profit Margin: 29.41%" in result.output

    def test_export(self, tmp_path):
        result = runner.invoke(app, ["export", str(tmp_path / "backup"), "--sample"])
        assert result.exit_code == 0
        written = tmp_path / "backup.csv"
        assert written.exists()
        assert len(written.read_text().splitlines()) == 7

    def test_validate_clean_file(self, csv_file):
        result = runner.invoke(app, ["validate", str(csv_file(GOOD_CSV))])
        assert result.exit_code == 0
        assert "2 importable, 0 rejected, 0 short" in result.output

    def test_validate_bad_file(self, csv_file):
        result = runner.invoke(app, ["validate", str(csv_file(BAD_CSV))])
        assert result.exit_code == 1
        assert "Line 4: Invalid amount: 'abc'" in result.output
