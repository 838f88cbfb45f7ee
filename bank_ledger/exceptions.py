"""
Exceptions for the bank ledger.

Business-rule rejections (bad amounts, insufficient funds, unknown accounts)
are not exceptions; they come back as OperationResult values.
"""


class LedgerError(Exception):
    """Base exception for all ledger errors."""


class ValidationError(LedgerError, ValueError):
    """Raised when an account cannot be constructed from the given values."""


class ExhaustedError(LedgerError, RuntimeError):
    """Raised when no unused account number can be allocated."""
