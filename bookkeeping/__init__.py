"""
Bookkeeping - Source Package

A single-user bookkeeping engine: an in-memory ledger of income, expense
and inventory transactions with VAT, CSV import/export, canned reports
and a fixed set of accounting formulas.

DESIGN PRINCIPLES:
1. The ledger owns its transactions; everything else only reads
2. Totals are computed on demand, never cached in presentation state
3. A bad row or a bad entry never takes the process down
4. Every user-visible action shows up on the activity console
5. Storage is a flat CSV file behind a swappable interface
"""

__version__ = "1.0.0"
__author__ = "E-19 Accounting Team"
