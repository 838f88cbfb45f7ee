"""
Ledger for the bank ledger system.

The Ledger is the registry of accounts and the only place transactions are
recorded. It also offers the account operations keyed by account number.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from .allocator import AccountNumberAllocator
from .exceptions import ValidationError
from .models import Account, AccountType, OperationResult, Transaction, TransactionType, as_decimal


class Ledger:
    """Owns accounts, the transaction log and the account number allocator."""

    def __init__(self, allocator: Optional[AccountNumberAllocator] = None):
        """Initialize an empty ledger."""
        self.allocator = allocator if allocator is not None else AccountNumberAllocator()
        self.logger = logging.getLogger(__name__)
        self._accounts: List[Account] = []
        self._transactions: List[Transaction] = []

    def open_account(self, holder_name: str, account_type: AccountType = AccountType.PLAIN,
                     interest_rate: Decimal = Decimal('0.00'),
                     overdraft_limit: Decimal = Decimal('0.00')) -> Account:
        """Create and register a new account with a freshly allocated number."""
        # Validated before allocation so rejected input does not use up numbers.
        terms = Account.validate(
            holder_name,
            account_type,
            interest_rate=interest_rate,
            overdraft_limit=overdraft_limit,
        )

        account = Account(account_number=self.allocator.allocate(), **terms)
        return self.create_account(account)

    def create_account(self, account: Account) -> Account:
        """Register an already constructed account."""
        if self.find_account(account.account_number):
            raise ValidationError(f"Account number {account.account_number} is already in use")

        self.allocator.reserve(account.account_number)
        self._accounts.append(account)
        self.logger.info(
            f"Account {account.account_number} created "
            f"({account.account_type.value}, holder {account.holder_name})"
        )
        return account

    def find_account(self, account_number: str) -> Optional[Account]:
        """Get account by account number."""
        for account in self._accounts:
            if account.account_number == account_number:
                return account
        return None

    def record_transaction(self, transaction_type: TransactionType, amount: Decimal,
                           from_account: str, to_account: Optional[str] = None) -> Transaction:
        """Record a completed money movement."""
        transaction = Transaction(
            timestamp=datetime.now(),
            amount=as_decimal(amount),
            transaction_type=transaction_type,
            from_account=from_account,
            to_account=to_account,
        )
        self._transactions.append(transaction)
        return transaction

    def list_accounts(self) -> List[Account]:
        """Get all accounts in creation order."""
        return list(self._accounts)

    def list_transactions(self) -> List[Transaction]:
        """Get all transactions in recording order."""
        return list(self._transactions)

    def transactions_for(self, account_number: str) -> List[Transaction]:
        """Get the transactions an account took part in, oldest first."""
        return [
            txn for txn in self._transactions
            if account_number in (txn.from_account, txn.to_account)
        ]

    def deposit(self, account_number: str, amount: Decimal) -> OperationResult:
        """Deposit money to an account."""
        account = self.find_account(account_number)
        if not account:
            return self._not_found(account_number)
        return account.deposit(amount, self)

    def withdraw(self, account_number: str, amount: Decimal) -> OperationResult:
        """Withdraw money from an account."""
        account = self.find_account(account_number)
        if not account:
            return self._not_found(account_number)
        return account.withdraw(amount, self)

    def transfer(self, from_account_number: str, to_account_number: str,
                 amount: Decimal) -> OperationResult:
        """Transfer money between accounts."""
        source = self.find_account(from_account_number)
        if not source:
            return self._not_found(from_account_number)

        destination = self.find_account(to_account_number)
        if not destination:
            return self._not_found(to_account_number)

        return source.transfer(amount, destination, self)

    def apply_interest(self, account_number: str) -> OperationResult:
        """Apply interest to a savings account."""
        account = self.find_account(account_number)
        if not account:
            return self._not_found(account_number)
        return account.apply_interest(self)

    def _not_found(self, account_number: str) -> OperationResult:
        self.logger.info(f"Account {account_number} not found")
        return OperationResult.rejected("Account not found.")
