"""Entry validation package."""

from bookkeeping.validation.validator import TransactionValidator

__all__ = ["TransactionValidator"]
