"""Ledger API - personal finance transactions and spending statistics."""

__version__ = "0.1.0"
