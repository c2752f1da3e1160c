"""Shared fixtures for the bookkeeping tests."""

from datetime import date

import pytest

from bookkeeping.config import get_settings
from bookkeeping.data import sample_transactions
from bookkeeping.ledger import Ledger
from bookkeeping.orchestrator import LedgerSession


FIXED_DAY = date(2024, 1, 15)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Reload settings per test; keep password hashing cheap."""
    monkeypatch.setenv("AUTH_HASH_ITERATIONS", "1000")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_DAY


@pytest.fixture
def empty_ledger():
    return Ledger()


@pytest.fixture
def sample_ledger():
    return Ledger(sample_transactions())


@pytest.fixture
def session(fixed_clock):
    """A session over the sample ledger, logged in as the administrator."""
    session = LedgerSession(clock=fixed_clock)
    session.load_sample_data()
    session.login("Error19", "admin123")
    return session


@pytest.fixture
def csv_file(tmp_path):
    """Write a CSV payload to a temp file and return its path."""
    def _write(text: str, name: str = "transactions.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
