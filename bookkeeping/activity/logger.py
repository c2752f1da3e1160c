"""
Activity Logger

Every user-visible action on the ledger is logged.
This provides:
1. A live activity console for the session
2. Structured logs for debugging
3. A record of rejected CSV lines and entries

The activity logger keeps only the most recent events in memory
(bounded console). Nothing is persisted.
"""

from collections import deque
from typing import Optional

import structlog

from bookkeeping.config import get_settings
from bookkeeping.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: str = "bookkeeping"):
    """Structured logger for library modules."""
    return structlog.get_logger(name)


class ActivityLogger:
    """
    Central activity logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The in-memory activity console (for display)
    """

    def __init__(self, console_size: Optional[int] = None):
        """
        Initialize activity logger.

        Args:
            console_size: How many events the console keeps.
                          Defaults to the configured console size.
        """
        if console_size is None:
            console_size = get_settings().app.activity_console_size
        self._events: deque[ActivityEvent] = deque(maxlen=console_size)
        self._logger = get_logger("bookkeeping.activity")

    def log(self, event: ActivityEvent) -> None:
        """Record an event on the console and in the structured log."""
        self._events.append(event)

        log_dict = event.to_log_dict()
        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def recent(self, limit: Optional[int] = None) -> list[ActivityEvent]:
        """Most recent events, oldest first."""
        events = list(self._events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def console_lines(self) -> list[str]:
        """The console as `[HH:MM:SS] message` lines."""
        return [event.to_console_line() for event in self._events]

    def clear(self) -> None:
        self._events.clear()

    def log_login_succeeded(self, username: str, full_name: str) -> None:
        self.log(ActivityEventBuilder.login_succeeded(username, full_name))

    def log_login_failed(self, username: str) -> None:
        self.log(ActivityEventBuilder.login_failed(username))

    def log_logged_out(self, username: str) -> None:
        self.log(ActivityEventBuilder.logged_out(username))

    def log_transaction_added(
        self,
        transaction_id: str,
        description: str,
        amount: str,
        vat_rate: int,
    ) -> None:
        self.log(ActivityEventBuilder.transaction_added(
            transaction_id=transaction_id,
            description=description,
            amount=amount,
            vat_rate=vat_rate,
        ))

    def log_transaction_deleted(self, transaction_id: str) -> None:
        self.log(ActivityEventBuilder.transaction_deleted(transaction_id))

    def log_entry_rejected(self, issues: list[dict]) -> None:
        self.log(ActivityEventBuilder.entry_rejected(issues))

    def log_sample_data_loaded(self, count: int) -> None:
        self.log(ActivityEventBuilder.sample_data_loaded(count))

    def log_csv_imported(self, filename: str, imported: int, rejected: int) -> None:
        self.log(ActivityEventBuilder.csv_imported(filename, imported, rejected))

    def log_csv_row_rejected(self, line_number: int, line: str, reason: str) -> None:
        self.log(ActivityEventBuilder.csv_row_rejected(line_number, line, reason))

    def log_import_failed(self, filename: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.import_failed(filename, error_message))

    def log_csv_exported(self, filename: str, count: int) -> None:
        self.log(ActivityEventBuilder.csv_exported(filename, count))

    def log_export_failed(self, filename: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.export_failed(filename, error_message))

    def log_report_generated(self, kind: str) -> None:
        self.log(ActivityEventBuilder.report_generated(kind))

    def log_formulas_calculated(self, succeeded: int, failed: int) -> None:
        self.log(ActivityEventBuilder.formulas_calculated(succeeded, failed))

    def log_formula_failed(self, label: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.formula_failed(label, error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(ActivityEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
