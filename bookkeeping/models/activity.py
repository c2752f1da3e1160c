"""
Activity Models

Every user-visible action on the ledger produces an activity event.
Events go to the structured log and to the in-memory activity console.

DESIGN DECISION: Activity events are not persisted.
The console is a live view of the session, not an audit trail.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEventType(str, Enum):
    """Types of events shown on the activity console."""
    # Session
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGGED_OUT = "logged_out"

    # Ledger mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"
    ENTRY_REJECTED = "entry_rejected"
    SAMPLE_DATA_LOADED = "sample_data_loaded"

    # CSV
    CSV_IMPORTED = "csv_imported"
    CSV_ROW_REJECTED = "csv_row_rejected"
    IMPORT_FAILED = "import_failed"
    CSV_EXPORTED = "csv_exported"
    EXPORT_FAILED = "export_failed"

    # Read-only views
    REPORT_GENERATED = "report_generated"
    FORMULAS_CALCULATED = "formulas_calculated"
    FORMULA_FAILED = "formula_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What the event is about (a transaction id, a file name, a report kind)
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Console message"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_console_line(self) -> str:
        """Render as `[HH:MM:SS] message` in local time."""
        stamp = self.timestamp.astimezone().strftime("%H:%M:%S")
        return f"[{stamp}] {self.description}"


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.transaction_deleted("TRX-001")
        event = ActivityEventBuilder.csv_imported("october.csv", 12, 1)
    """

    @staticmethod
    def login_succeeded(username: str, full_name: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOGIN_SUCCEEDED,
            entity_type="user",
            entity_id=username,
            description=f"Logged in as {full_name}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOGIN_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="user",
            entity_id=username,
            description="Invalid username or password",
            is_user_action=True,
        )

    @staticmethod
    def logged_out(username: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOGGED_OUT,
            entity_type="user",
            entity_id=username,
            description=f"Logged out {username}",
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        description: str,
        amount: str,
        vat_rate: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Added transaction: {description} ({amount}) with VAT {vat_rate}%",
            details={
                "amount": amount,
                "vat_rate": vat_rate,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Deleted transaction: {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def entry_rejected(issues: list[dict]) -> ActivityEvent:
        messages = "; ".join(issue["message"] for issue in issues)
        return ActivityEvent(
            event_type=ActivityEventType.ENTRY_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_type="transaction",
            description=f"Entry rejected: {messages}"[:500],
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def sample_data_loaded(count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAMPLE_DATA_LOADED,
            description=f"Loaded {count} sample transactions",
            details={"count": count},
        )

    @staticmethod
    def csv_imported(filename: str, imported: int, rejected: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CSV_IMPORTED,
            entity_type="file",
            entity_id=filename,
            description=f"Imported {imported} transactions from: {filename}",
            details={
                "imported": imported,
                "rejected": rejected,
            },
            is_user_action=True,
        )

    @staticmethod
    def csv_row_rejected(line_number: int, line: str, reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CSV_ROW_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_type="csv_line",
            entity_id=str(line_number),
            description=f"Error parsing line: {line}"[:500],
            details={
                "line_number": line_number,
                "reason": reason,
            },
        )

    @staticmethod
    def import_failed(filename: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.IMPORT_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="file",
            entity_id=filename,
            description=f"Import failed: {error_message}"[:500],
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def csv_exported(filename: str, count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CSV_EXPORTED,
            entity_type="file",
            entity_id=filename,
            description=f"Exported transactions to: {filename}",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def export_failed(filename: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPORT_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="file",
            entity_id=filename,
            description=f"Export failed: {error_message}"[:500],
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def report_generated(kind: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.REPORT_GENERATED,
            entity_type="report",
            entity_id=kind,
            description=f"Generated {kind} report",
            is_user_action=True,
        )

    @staticmethod
    def formulas_calculated(succeeded: int, failed: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.FORMULAS_CALCULATED,
            description="All financial calculations completed",
            details={
                "succeeded": succeeded,
                "failed": failed,
            },
            is_user_action=True,
        )

    @staticmethod
    def formula_failed(label: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.FORMULA_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="formula",
            entity_id=label,
            description=f"Error calculating {label}: {error_message}"[:500],
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SYSTEM_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
