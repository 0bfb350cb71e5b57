"""
Retail Bank Simulation

An in-memory model of a small retail bank: customers, savings and checking
accounts, an append-only transaction history per account, and a bank that
aggregates them. All monetary values use Decimal.
"""

__version__ = "1.0.0"
