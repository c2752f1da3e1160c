"""Tests for the activity console."""

import re

from bookkeeping.activity import ActivityLogger
from bookkeeping.models import ActivityEventBuilder, ActivityEventType, ActivitySeverity


class TestActivityLogger:

    def test_console_is_bounded(self):
        logger = ActivityLogger(console_size=2)
        logger.log_transaction_deleted("A")
        logger.log_transaction_deleted("B")
        logger.log_transaction_deleted("C")

        assert [e.entity_id for e in logger.recent()] == ["B", "C"]

    def test_console_size_from_settings(self, monkeypatch):
        monkeypatch.setenv("ACTIVITY_CONSOLE_SIZE", "10")
        logger = ActivityLogger()
        for i in range(15):
            logger.log_transaction_deleted(str(i))
        assert len(logger.recent()) == 10

    def test_recent_limit(self):
        logger = ActivityLogger(console_size=10)
        for kind in ("Income", "Expense", "VAT"):
            logger.log_report_generated(kind)

        assert [e.entity_id for e in logger.recent(2)] == ["Expense", "VAT"]
        assert logger.recent(0) == []

    def test_console_lines(self):
        logger = ActivityLogger(console_size=10)
        logger.log_csv_exported("backup.csv", 6)

        (line,) = logger.console_lines()
        assert re.match(r"^\[\d{2}:\d{2}:\d{2}\] Exported transactions to: backup\.csv$", line)

    def test_clear(self):
        logger = ActivityLogger(console_size=10)
        logger.log_login_failed("nobody")
        logger.clear()
        assert logger.recent() == []

    def test_log_error(self):
        logger = ActivityLogger(console_size=10)
        logger.log_error("RuntimeError", "boom", {"where": "export"})

        event = logger.recent(1)[0]
        assert event.event_type == ActivityEventType.SYSTEM_ERROR
        assert event.severity == ActivitySeverity.ERROR
        assert event.error_message == "boom"
        assert event.details == {"where": "export"}

    def test_log_accepts_built_events(self):
        logger = ActivityLogger(console_size=10)
        logger.log(ActivityEventBuilder.import_failed("in.csv", "No such file"))

        event = logger.recent(1)[0]
        assert event.description == "Import failed: No such file"
        assert event.severity == ActivitySeverity.ERROR
