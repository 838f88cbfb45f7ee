"""
Bank Ledger

An in-memory bank ledger with plain, savings and checking accounts,
transfers between them and an audit trail of every money movement.
"""

__version__ = "0.1.0"

from typing import Optional

from .allocator import AccountNumberAllocator
from .config import LedgerConfig
from .exceptions import ExhaustedError, LedgerError, ValidationError
from .ledger import Ledger
from .models import Account, AccountType, OperationResult, Transaction, TransactionType


def create_ledger(config: Optional[LedgerConfig] = None) -> Ledger:
    """
    Create a Ledger with its own account number allocator.

    Args:
        config: Ledger settings; defaults are used when omitted

    Returns:
        Ledger instance
    """
    config = config or LedgerConfig()
    allocator = AccountNumberAllocator(seed=config.seed, max_attempts=config.max_attempts)
    return Ledger(allocator)


__all__ = [
    "Account",
    "AccountType",
    "Transaction",
    "TransactionType",
    "OperationResult",
    "AccountNumberAllocator",
    "Ledger",
    "LedgerConfig",
    "LedgerError",
    "ValidationError",
    "ExhaustedError",
    "create_ledger",
]
