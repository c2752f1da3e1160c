"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for file storage.
This allows us to:
1. Use flat CSV files on disk today
2. Use in-memory storage for testing
3. Keep the ledger decoupled from where its CSV text comes from

The interface is intentionally small: whole-payload reads and writes.
The ledger does the parsing and formatting.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from bookkeeping.ledger.errors import LedgerError


PathLike = Union[str, Path]


class TransactionStorageInterface(ABC):
    """
    Abstract interface for reading and writing CSV payloads.
    """

    @abstractmethod
    def read_text(self, path: PathLike) -> str:
        """
        Read a whole CSV payload.

        Args:
            path: Location of the payload

        Returns:
            The payload text

        Raises:
            StorageReadError: If the payload cannot be read
        """
        pass

    @abstractmethod
    def write_text(self, path: PathLike, text: str) -> Path:
        """
        Write a whole CSV payload, replacing any previous one.

        A failed write must leave the previous payload untouched.

        Args:
            path: Target location
            text: Payload to write

        Returns:
            The location actually written

        Raises:
            StorageWriteError: If the payload cannot be written
        """
        pass


class StorageError(LedgerError):
    """Base exception for storage operations."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        super().__init__(message)


class StorageReadError(StorageError):
    """Could not read a payload."""
    pass


class StorageWriteError(StorageError):
    """Could not write a payload."""
    pass
