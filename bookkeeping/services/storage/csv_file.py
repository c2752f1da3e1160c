"""
CSV File Storage Implementation

DESIGN DECISION: Flat CSV files are the only storage because:
1. Users open exports directly in a spreadsheet program
2. No database setup required
3. Imports come from the same files users edit by hand

TRADEOFFS:
- No partial updates; every export rewrites the whole file
- A spreadsheet program may hold a lock on the file (we retry briefly)

Writes go to a temporary sibling first and replace the target in one
step, so a failed export never leaves a half-written file behind.
"""

import os
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bookkeeping.activity import get_logger
from bookkeeping.config import get_settings
from bookkeeping.services.storage.interface import (
    PathLike,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


CSV_SUFFIX = ".csv"

# Only a locked file is worth retrying; a missing directory stays missing.
_retry_locked = retry(
    retry=retry_if_exception_type(PermissionError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    reraise=True,
)


def ensure_csv_suffix(path: PathLike) -> Path:
    """Append .csv unless the name already ends with it (any case)."""
    path = Path(path)
    if path.name.lower().endswith(CSV_SUFFIX):
        return path
    return path.with_name(path.name + CSV_SUFFIX)


class CsvFileStorage(TransactionStorageInterface):
    """
    Reads and writes CSV payloads on the local filesystem.
    """

    def __init__(self, encoding: Optional[str] = None):
        self._encoding = encoding or get_settings().ledger.csv_encoding
        self._logger = get_logger("bookkeeping.storage")

    @_retry_locked
    def _read(self, path: Path) -> str:
        with open(path, "r", encoding=self._encoding, newline="") as f:
            return f.read()

    @_retry_locked
    def _write_atomic(self, path: Path, text: str) -> None:
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            with open(tmp_path, "w", encoding=self._encoding, newline="") as f:
                f.write(text)
            os.replace(tmp_path, path)
        except (OSError, UnicodeEncodeError):
            if tmp_path.exists():
                tmp_path.unlink()
            raise

    def read_text(self, path: PathLike) -> str:
        path = Path(path)
        try:
            text = self._read(path)
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error("csv_read_failed", path=str(path), error=str(e))
            raise StorageReadError(path, str(e)) from e

        self._logger.debug("csv_read", path=str(path), size=len(text))
        return text

    def write_text(self, path: PathLike, text: str) -> Path:
        """Write the payload, appending .csv to the name when missing."""
        path = ensure_csv_suffix(path)
        try:
            self._write_atomic(path, text)
        except (OSError, UnicodeEncodeError) as e:
            self._logger.error("csv_write_failed", path=str(path), error=str(e))
            raise StorageWriteError(path, str(e)) from e

        self._logger.debug("csv_written", path=str(path), size=len(text))
        return path
