"""Seed data package."""

from bookkeeping.data.samples import sample_transactions

__all__ = ["sample_transactions"]
