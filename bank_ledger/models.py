"""
Data models for the bank ledger.

This module contains the account, transaction and operation-result structures
together with the account-level money movement rules.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .exceptions import ValidationError

if TYPE_CHECKING:
    from .ledger import Ledger


logger = logging.getLogger(__name__)


class AccountType(Enum):
    """Kinds of bank accounts."""
    PLAIN = "plain"
    SAVINGS = "savings"
    CHECKING = "checking"

    @property
    def label(self) -> str:
        return {
            AccountType.PLAIN: "Regular",
            AccountType.SAVINGS: "Savings",
            AccountType.CHECKING: "Checking",
        }[self]


class TransactionType(Enum):
    """Kinds of recorded money movements."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"
    INTEREST = "interest"


def as_decimal(value) -> Decimal:
    """Convert int, float, str or Decimal input to Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one completed money movement."""

    timestamp: datetime
    amount: Decimal
    transaction_type: TransactionType
    from_account: str
    to_account: Optional[str] = None  # Transfers only


@dataclass
class OperationResult:
    """Outcome of a deposit, withdrawal, transfer or interest operation."""

    success: bool
    reason: Optional[str] = None
    balance: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    warning: Optional[str] = None
    transaction: Optional[Transaction] = None

    @classmethod
    def rejected(cls, reason: str, balance: Optional[Decimal] = None) -> "OperationResult":
        return cls(success=False, reason=reason, balance=balance)

    def __bool__(self) -> bool:
        return self.success


@dataclass
class Account:
    """
    A bank account.

    The variant is selected by ``account_type``. Savings accounts use
    ``interest_rate``, checking accounts use ``overdraft_limit``; the other
    variant's field stays at zero and is ignored.
    """

    account_number: str
    holder_name: str
    account_type: AccountType = AccountType.PLAIN
    balance: Decimal = Decimal('0.00')
    interest_rate: Decimal = Decimal('0.00')  # Percentage per application
    overdraft_limit: Decimal = Decimal('0.00')
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate and normalize account fields."""
        number = self.account_number
        if not isinstance(number, str) or len(number) != 5 or not number.isdigit():
            raise ValidationError(f"Account number must be 5 digits, got {number!r}")

        terms = self.validate(
            self.holder_name,
            self.account_type,
            balance=self.balance,
            interest_rate=self.interest_rate,
            overdraft_limit=self.overdraft_limit,
        )
        for name, value in terms.items():
            setattr(self, name, value)

        if self.created_at is None:
            self.created_at = datetime.now()

    def __setattr__(self, name, value):
        if name == 'account_number' and 'account_number' in self.__dict__:
            raise AttributeError("account_number cannot be changed")
        super().__setattr__(name, value)

    @classmethod
    def validate(cls, holder_name, account_type=AccountType.PLAIN, balance=Decimal('0.00'),
                 interest_rate=Decimal('0.00'), overdraft_limit=Decimal('0.00')) -> dict:
        """
        Check account fields without building an account.

        Returns the normalized fields; raises ValidationError on the first
        field that cannot be accepted.
        """
        holder_name = cls._check_holder_name(holder_name)

        if not isinstance(account_type, AccountType):
            try:
                account_type = AccountType(account_type)
            except ValueError:
                raise ValidationError(f"Unknown account type: {account_type!r}")

        try:
            balance = as_decimal(balance)
            interest_rate = as_decimal(interest_rate)
            overdraft_limit = as_decimal(overdraft_limit)
        except (InvalidOperation, ValueError):
            raise ValidationError("Balance, interest rate and overdraft limit must be numeric")

        if not all(value.is_finite() for value in (balance, interest_rate, overdraft_limit)):
            raise ValidationError("Balance, interest rate and overdraft limit must be finite")

        if overdraft_limit < 0:
            raise ValidationError("Overdraft limit cannot be negative")

        if account_type is AccountType.CHECKING:
            if balance < -overdraft_limit:
                raise ValidationError("Opening balance cannot exceed the overdraft limit")
        elif balance < 0:
            raise ValidationError("Opening balance cannot be negative")

        return {
            'holder_name': holder_name,
            'account_type': account_type,
            'balance': balance,
            'interest_rate': interest_rate,
            'overdraft_limit': overdraft_limit,
        }

    @staticmethod
    def _check_holder_name(holder_name) -> str:
        if not isinstance(holder_name, str) or not holder_name.strip():
            raise ValidationError("Account name required")
        return holder_name.strip()

    def rename(self, holder_name: str) -> None:
        """Change the account holder name."""
        self.holder_name = self._check_holder_name(holder_name)

    @property
    def is_savings(self) -> bool:
        return self.account_type is AccountType.SAVINGS

    @property
    def is_checking(self) -> bool:
        return self.account_type is AccountType.CHECKING

    @property
    def available_balance(self) -> Decimal:
        """Largest amount that can leave the account right now."""
        if self.is_checking:
            return self.balance + self.overdraft_limit
        return self.balance

    @property
    def overdrawn_by(self) -> Decimal:
        return -self.balance if self.balance < 0 else Decimal('0.00')

    def can_withdraw(self, amount) -> bool:
        """Check if a positive amount fits in the available balance."""
        amount = as_decimal(amount)
        if not amount.is_finite():
            return False
        return Decimal('0') < amount <= self.available_balance

    @staticmethod
    def _check_amount(amount: Decimal, action: str) -> Optional[str]:
        """Return the rejection reason for a malformed or non-positive amount."""
        if not amount.is_finite():
            return f"{action} amount must be a finite number."
        if amount <= 0:
            return f"{action} amount must be positive."
        return None

    def _check_outgoing(self, amount: Decimal, action: str,
                        shortfall: str = "Insufficient funds") -> Optional[str]:
        """Return the rejection reason for an outgoing amount, if any."""
        reason = self._check_amount(amount, action)
        if reason:
            return reason
        if not self.can_withdraw(amount):
            if self.is_checking:
                return (
                    f"{shortfall}. Available balance (including overdraft): "
                    f"{self.available_balance:.2f}"
                )
            return f"{shortfall}."
        return None

    def deposit(self, amount, ledger: "Ledger") -> OperationResult:
        """Deposit money into the account."""
        amount = as_decimal(amount)
        reason = self._check_amount(amount, "Deposit")
        if reason:
            return self._reject(reason)

        self.balance += amount
        transaction = ledger.record_transaction(
            TransactionType.DEPOSIT, amount, self.account_number
        )
        return OperationResult(
            success=True, balance=self.balance, amount=amount, transaction=transaction
        )

    def withdraw(self, amount, ledger: "Ledger") -> OperationResult:
        """
        Withdraw money from the account.

        Checking accounts may go below zero down to ``-overdraft_limit``; the
        result then carries an overdrawn warning.
        """
        amount = as_decimal(amount)
        reason = self._check_outgoing(amount, "Withdrawal")
        if reason:
            return self._reject(reason)

        self.balance -= amount
        transaction = ledger.record_transaction(
            TransactionType.WITHDRAW, amount, self.account_number
        )

        warning = None
        if self.balance < 0:
            warning = f"Account is overdrawn by {self.overdrawn_by:.2f}"
            logger.warning(f"Account {self.account_number}: {warning}")

        return OperationResult(
            success=True,
            balance=self.balance,
            amount=amount,
            warning=warning,
            transaction=transaction,
        )

    def transfer(self, amount, destination: Optional["Account"],
                 ledger: "Ledger") -> OperationResult:
        """Move money to another account as a single recorded transfer."""
        amount = as_decimal(amount)
        reason = self._check_outgoing(amount, "Transfer", "Insufficient funds for transfer")
        if reason:
            return self._reject(reason)

        if not isinstance(destination, Account) or destination is self:
            return self._reject("Invalid destination account.")

        source_balance = self.balance
        destination_balance = destination.balance
        self.balance -= amount
        destination.balance += amount
        try:
            transaction = ledger.record_transaction(
                TransactionType.TRANSFER,
                amount,
                self.account_number,
                destination.account_number,
            )
        except Exception:
            self.balance = source_balance
            destination.balance = destination_balance
            raise

        warning = None
        if self.balance < 0:
            warning = f"Account is overdrawn by {self.overdrawn_by:.2f}"
            logger.warning(f"Account {self.account_number}: {warning}")

        return OperationResult(
            success=True,
            balance=self.balance,
            amount=amount,
            warning=warning,
            transaction=transaction,
        )

    def apply_interest(self, ledger: "Ledger") -> OperationResult:
        """Add one interest period to a savings account."""
        if not self.is_savings:
            return self._reject("Not a savings account.")

        # A negative rate lowers the balance; the formula is applied as-is.
        interest = self.balance * (self.interest_rate / 100)
        self.balance += interest
        transaction = ledger.record_transaction(
            TransactionType.INTEREST, interest, self.account_number
        )
        return OperationResult(
            success=True, balance=self.balance, amount=interest, transaction=transaction
        )

    def summary(self) -> dict:
        """Get a read-only snapshot of the account."""
        data = {
            'account_number': self.account_number,
            'holder_name': self.holder_name,
            'balance': self.balance,
            'account_type': self.account_type.label,
        }
        if self.is_savings:
            data['interest_rate'] = self.interest_rate
        elif self.is_checking:
            data['overdraft_limit'] = self.overdraft_limit
            if self.balance < 0:
                data['overdrawn_by'] = self.overdrawn_by
        return data

    def _reject(self, reason: str) -> OperationResult:
        logger.info(f"Account {self.account_number}: {reason}")
        return OperationResult.rejected(reason, self.balance)
