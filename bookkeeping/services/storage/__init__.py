"""
Storage Services Package

Provides the abstract storage interface and the CSV file implementation.
"""

from bookkeeping.services.storage.interface import (
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)
from bookkeeping.services.storage.csv_file import (
    CsvFileStorage,
    ensure_csv_suffix,
)

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # CSV file implementation
    "CsvFileStorage",
    "ensure_csv_suffix",
]
