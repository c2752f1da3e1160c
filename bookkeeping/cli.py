"""CLI for the bookkeeping engine."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from bookkeeping.config import get_settings
from bookkeeping.data import sample_transactions
from bookkeeping.formulas import FormulaEvaluator
from bookkeeping.ledger import Ledger, decode_transactions
from bookkeeping.reports import ReportGenerator, format_currency
from bookkeeping.services.storage import CsvFileStorage, StorageError

app = typer.Typer(
    name="bookkeeping",
    help="Ledger totals, reports and formulas from a transactions CSV",
    no_args_is_help=True,
)

InputOption = Annotated[
    Optional[Path], typer.Option("--input", "-i", help="Transactions CSV to load")
]
SampleOption = Annotated[
    bool, typer.Option("--sample", help="Load the sample transactions")
]


@app.callback()
def main() -> None:
    logging.getLogger("bookkeeping").setLevel(get_settings().app.log_level)


def load_ledger(input_path: Optional[Path], sample: bool) -> Ledger:
    """Build a ledger from sample data and/or a CSV file."""
    if input_path is None and not sample:
        typer.echo("Error: pass --input CSV or --sample", err=True)
        raise typer.Exit(1)

    ledger = Ledger(sample_transactions() if sample else None)

    if input_path is not None:
        try:
            text = CsvFileStorage().read_text(input_path)
        except StorageError as e:
            typer.echo(f"Error reading {input_path}: {e}", err=True)
            raise typer.Exit(1)

        result = ledger.import_csv_detailed(text)
        for row in result.rejected_rows:
            typer.echo(f"Skipped line {row.line_number}: {row.reason}", err=True)

    return ledger


@app.command()
def totals(
    input_path: InputOption = None,
    sample: SampleOption = False,
) -> None:
    """Print income, expense, VAT and net balance."""
    ledger = load_ledger(input_path, sample)
    symbol = get_settings().ledger.currency_symbol
    result = ledger.totals()

    typer.echo(f"Total Income: {format_currency(result.total_income, symbol)}")
    typer.echo(f"Total Expenses: {format_currency(result.total_expense, symbol)}")
    typer.echo(f"Total VAT: {format_currency(result.total_vat, symbol)}")
    typer.echo(f"Net Balance: {format_currency(result.net_balance, symbol)}")


@app.command()
def report(
    kind: Annotated[str, typer.Argument(help="Income, Expense, Summary or VAT")],
    input_path: InputOption = None,
    sample: SampleOption = False,
) -> None:
    """Print one of the canned reports."""
    ledger = load_ledger(input_path, sample)
    rendered = ReportGenerator(ledger).generate(kind)

    if not rendered.is_valid:
        typer.echo(f"Error: {rendered.text}: {kind}", err=True)
        raise typer.Exit(2)

    typer.echo(rendered.text)


@app.command()
def formulas(
    input_path: InputOption = None,
    sample: SampleOption = False,
) -> None:
    """Evaluate the formula sheet."""
    ledger = load_ledger(input_path, sample)

    section = None
    for result in FormulaEvaluator(ledger).evaluate_all():
        if result.section != section:
            section = result.section
            typer.echo(f"\n{section.value}")
        typer.echo(f"  {result.label}: {result.display}")


@app.command()
def export(
    out: Annotated[Path, typer.Argument(help="Destination CSV (.csv appended if missing)")],
    input_path: InputOption = None,
    sample: SampleOption = False,
) -> None:
    """Write the loaded transactions back out as CSV."""
    ledger = load_ledger(input_path, sample)

    try:
        written = CsvFileStorage().write_text(out, ledger.export_csv())
    except StorageError as e:
        typer.echo(f"Error writing {e.path}: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Exported {len(ledger)} transactions to {written}")


@app.command()
def validate(
    file: Annotated[Path, typer.Argument(help="Transactions CSV to check")],
) -> None:
    """Check that every line of a CSV file imports cleanly."""
    try:
        text = CsvFileStorage().read_text(file)
    except StorageError as e:
        typer.echo(f"Error reading {file}: {e}", err=True)
        raise typer.Exit(1)

    result = decode_transactions(text)
    for row in result.rejected_rows:
        typer.echo(f"Line {row.line_number}: {row.reason}")

    typer.echo(
        f"{result.imported_count} importable, "
        f"{result.rejected_count} rejected, "
        f"{result.short_lines} short"
    )
    if result.rejected_rows:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
