"""Report generation package."""

from bookkeeping.reports.formatting import (
    format_currency,
    format_number,
    format_percent,
    format_units,
)
from bookkeeping.reports.generator import (
    INVALID_REPORT_TEXT,
    InvalidReportKindError,
    ReportGenerator,
)

__all__ = [
    "INVALID_REPORT_TEXT",
    "InvalidReportKindError",
    "ReportGenerator",
    "format_currency",
    "format_number",
    "format_percent",
    "format_units",
]
