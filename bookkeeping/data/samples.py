"""Sample transactions loaded into a fresh session."""

from decimal import Decimal

from bookkeeping.models.transaction import Transaction, TransactionType


def sample_transactions() -> list[Transaction]:
    """Three day-to-day entries plus an opening/purchase/closing inventory set."""
    return [
        Transaction(
            id="TRX-001",
            date="2023-10-01",
            description="Office Supplies",
            amount=Decimal("1250.50"),
            type=TransactionType.EXPENSE,
            vat_rate=15,
        ),
        Transaction(
            id="TRX-002",
            date="2023-10-05",
            description="Client Payment",
            amount=Decimal("8500.00"),
            type=TransactionType.INCOME,
            vat_rate=0,
        ),
        Transaction(
            id="TRX-003",
            date="2023-10-10",
            description="Software License",
            amount=Decimal("3200.75"),
            type=TransactionType.EXPENSE,
            vat_rate=15,
        ),
        Transaction(
            id="INV-001",
            date="2023-10-01",
            description="Opening Inventory",
            amount=Decimal("5000.00"),
            type=TransactionType.INVENTORY,
            vat_rate=0,
        ),
        Transaction(
            id="INV-002",
            date="2023-10-15",
            description="Inventory Purchase",
            amount=Decimal("3000.00"),
            type=TransactionType.INVENTORY,
            vat_rate=0,
        ),
        Transaction(
            id="INV-003",
            date="2023-10-31",
            description="Closing Inventory",
            amount=Decimal("2000.00"),
            type=TransactionType.INVENTORY,
            vat_rate=0,
        ),
    ]
