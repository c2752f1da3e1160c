"""Configuration package."""

from bookkeeping.config.settings import (
    AppSettings,
    AuthSettings,
    FormulaSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "FormulaSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
