"""Services package."""

from bookkeeping.services.storage import (
    CsvFileStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
    ensure_csv_suffix,
)

__all__ = [
    # Storage services
    "CsvFileStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TransactionStorageInterface",
    "ensure_csv_suffix",
]
