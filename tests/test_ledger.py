"""
Tests for the ledger module.

This module contains tests for the Ledger class: account registration,
lookup, transaction recording and the number-keyed operations.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

from bank_ledger import LedgerConfig, create_ledger
from bank_ledger.allocator import AccountNumberAllocator
from bank_ledger.exceptions import ExhaustedError, ValidationError
from bank_ledger.ledger import Ledger
from bank_ledger.models import Account, AccountType, TransactionType


class TestLedger:
    """Test Ledger class."""

    @pytest.fixture
    def ledger(self):
        """Create a ledger with a seeded allocator."""
        return Ledger(AccountNumberAllocator(seed=7))

    def test_default_initialization(self):
        ledger = Ledger()

        assert isinstance(ledger.allocator, AccountNumberAllocator)
        assert ledger.list_accounts() == []
        assert ledger.list_transactions() == []

    def test_create_ledger_factory(self):
        ledger = create_ledger(LedgerConfig(seed=3, max_attempts=10))

        assert ledger.allocator.max_attempts == 10

    def test_create_ledger_is_reproducible(self):
        first = create_ledger(LedgerConfig(seed=99))
        second = create_ledger(LedgerConfig(seed=99))

        assert (first.open_account("Alice").account_number
                == second.open_account("Alice").account_number)

    def test_open_plain_account(self, ledger):
        account = ledger.open_account("Alice")

        assert account.account_type == AccountType.PLAIN
        assert account.balance == Decimal('0.00')
        assert ledger.allocator.is_issued(account.account_number)
        assert ledger.list_accounts() == [account]

    def test_open_variant_accounts(self, ledger):
        savings = ledger.open_account("Cara", AccountType.SAVINGS, interest_rate=Decimal('10'))
        checking = ledger.open_account("Bob", AccountType.CHECKING, overdraft_limit=Decimal('50'))

        assert savings.interest_rate == Decimal('10')
        assert checking.overdraft_limit == Decimal('50')
        assert savings.account_number != checking.account_number

    def test_open_account_empty_name(self, ledger):
        """Test a rejected name neither registers an account nor uses a number."""
        with pytest.raises(ValidationError, match="Account name required"):
            ledger.open_account("   ")

        assert ledger.list_accounts() == []
        assert ledger.allocator.issued_count == 0

    def test_open_account_negative_overdraft(self, ledger):
        with pytest.raises(ValidationError):
            ledger.open_account("Bob", AccountType.CHECKING, overdraft_limit=Decimal('-5'))

        assert ledger.list_accounts() == []

    def test_open_account_exhausted(self, ledger):
        with patch.object(ledger.allocator, 'allocate', side_effect=ExhaustedError("full")):
            with pytest.raises(ExhaustedError):
                ledger.open_account("Alice")

        assert ledger.list_accounts() == []

    def test_create_account(self, ledger):
        account = Account(account_number="12345", holder_name="Alice")

        assert ledger.create_account(account) is account
        assert ledger.find_account("12345") is account

    def test_accounts_in_creation_order(self, ledger):
        accounts = [ledger.open_account(f"Holder {i}") for i in range(5)]

        assert ledger.list_accounts() == accounts

    def test_list_accounts_returns_copy(self, ledger):
        ledger.open_account("Alice")

        ledger.list_accounts().clear()

        assert len(ledger.list_accounts()) == 1

    def test_find_account(self, ledger):
        alice = ledger.open_account("Alice")
        bob = ledger.open_account("Bob")

        assert ledger.find_account(alice.account_number) is alice
        assert ledger.find_account(bob.account_number) is bob

    def test_find_account_missing(self, ledger):
        ledger.open_account("Alice")

        assert ledger.find_account("no-such") is None
        assert ledger.find_account("") is None

    def test_record_transaction(self, ledger):
        before = datetime.now()
        transaction = ledger.record_transaction(TransactionType.DEPOSIT, "12.50", "00001")

        assert transaction.amount == Decimal('12.50')
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.from_account == "00001"
        assert transaction.to_account is None
        assert before <= transaction.timestamp <= datetime.now()
        assert ledger.list_transactions() == [transaction]

    def test_record_transfer_transaction(self, ledger):
        transaction = ledger.record_transaction(
            TransactionType.TRANSFER, Decimal('5'), "00001", "00002"
        )

        assert transaction.to_account == "00002"

    def test_transactions_in_recording_order(self, ledger):
        first = ledger.record_transaction(TransactionType.DEPOSIT, Decimal('1'), "00001")
        second = ledger.record_transaction(TransactionType.WITHDRAW, Decimal('1'), "00001")

        assert ledger.list_transactions() == [first, second]

    def test_list_transactions_returns_copy(self, ledger):
        ledger.record_transaction(TransactionType.DEPOSIT, Decimal('1'), "00001")

        ledger.list_transactions().clear()

        assert len(ledger.list_transactions()) == 1

    def test_transactions_for(self, ledger):
        alice = ledger.open_account("Alice")
        bob = ledger.open_account("Bob")
        cara = ledger.open_account("Cara")

        ledger.deposit(alice.account_number, Decimal('100'))
        ledger.deposit(cara.account_number, Decimal('10'))
        ledger.transfer(alice.account_number, bob.account_number, Decimal('40'))

        history = ledger.transactions_for(bob.account_number)
        assert len(history) == 1
        assert history[0].transaction_type == TransactionType.TRANSFER

        assert len(ledger.transactions_for(alice.account_number)) == 2
        assert ledger.transactions_for("99999") == []


class TestLedgerOperations:
    """Test number-keyed operations on the ledger."""

    @pytest.fixture
    def ledger(self):
        return Ledger(AccountNumberAllocator(seed=11))

    def test_deposit(self, ledger):
        account = ledger.open_account("Alice")

        result = ledger.deposit(account.account_number, Decimal('100'))

        assert result.success is True
        assert result.balance == Decimal('100')

    def test_withdraw(self, ledger):
        account = ledger.open_account("Alice")
        ledger.deposit(account.account_number, Decimal('100'))

        result = ledger.withdraw(account.account_number, Decimal('60'))

        assert result.success is True
        assert account.balance == Decimal('40')

    def test_transfer(self, ledger):
        alice = ledger.open_account("Alice")
        bob = ledger.open_account("Bob")
        ledger.deposit(alice.account_number, Decimal('100'))

        result = ledger.transfer(alice.account_number, bob.account_number, Decimal('25'))

        assert result.success is True
        assert alice.balance == Decimal('75')
        assert bob.balance == Decimal('25')

    def test_apply_interest(self, ledger):
        cara = ledger.open_account("Cara", AccountType.SAVINGS, interest_rate=Decimal('10'))
        ledger.deposit(cara.account_number, Decimal('200'))

        result = ledger.apply_interest(cara.account_number)

        assert result.success is True
        assert result.amount == Decimal('20')

    def test_apply_interest_not_savings(self, ledger):
        alice = ledger.open_account("Alice")

        result = ledger.apply_interest(alice.account_number)

        assert result.success is False
        assert result.reason == "Not a savings account."

    @pytest.mark.parametrize("operation", ["deposit", "withdraw"])
    def test_unknown_account(self, ledger, operation):
        result = getattr(ledger, operation)("00000", Decimal('10'))

        assert result.success is False
        assert result.reason == "Account not found."
        assert ledger.list_transactions() == []

    def test_apply_interest_unknown_account(self, ledger):
        result = ledger.apply_interest("00000")

        assert result.success is False
        assert result.reason == "Account not found."

    def test_transfer_unknown_source(self, ledger):
        bob = ledger.open_account("Bob")

        result = ledger.transfer("no-such", bob.account_number, Decimal('10'))

        assert result.success is False
        assert result.reason == "Account not found."

    def test_transfer_unknown_destination(self, ledger):
        alice = ledger.open_account("Alice")
        ledger.deposit(alice.account_number, Decimal('100'))

        result = ledger.transfer(alice.account_number, "no-such", Decimal('10'))

        assert result.success is False
        assert result.reason == "Account not found."
        assert alice.balance == Decimal('100')
        assert len(ledger.list_transactions()) == 1


class TestLedgerAccountRules:
    """Test allocator ownership and account registration rules."""

    def test_keeps_given_allocator(self):
        allocator = AccountNumberAllocator(seed=1)

        assert Ledger(allocator).allocator is allocator

    def test_factory_applies_seed_and_attempts(self):
        ledger = create_ledger(LedgerConfig(seed=42, max_attempts=3))
        expected = AccountNumberAllocator(seed=42)

        assert ledger.allocator.max_attempts == 3
        assert [ledger.open_account("Alice").account_number for _ in range(5)] == \
            [expected.allocate() for _ in range(5)]

    def test_create_account_rejects_negative_balance(self):
        ledger = Ledger()

        with pytest.raises(ValidationError):
            ledger.create_account(Account("00001", "Eve", balance=Decimal('-500')))

        assert ledger.list_accounts() == []

    def test_create_account_duplicate_number(self):
        ledger = Ledger()
        ledger.create_account(Account("00007", "Manual"))

        with pytest.raises(ValidationError, match="already in use"):
            ledger.create_account(Account("00007", "Copy"))

        assert [a.holder_name for a in ledger.list_accounts()] == ["Manual"]

    def test_create_account_reserves_number(self):
        ledger = Ledger(AccountNumberAllocator(seed=5))
        ledger.create_account(Account("00007", "Manual"))

        with patch.object(ledger.allocator._random, 'randrange', side_effect=[7, 9]):
            opened = ledger.open_account("Drawn")

        assert opened.account_number == "00009"
        assert ledger.find_account("00007").holder_name == "Manual"
        assert ledger.find_account("00009") is opened

    @pytest.mark.parametrize("options", [
        {'account_type': AccountType.CHECKING, 'overdraft_limit': Decimal('-5')},
        {'account_type': AccountType.SAVINGS, 'interest_rate': "abc"},
        {'account_type': "business"},
    ])
    def test_rejected_input_does_not_use_numbers(self, options):
        ledger = Ledger(AccountNumberAllocator(seed=5))

        with pytest.raises(ValidationError):
            ledger.open_account("Bob", **options)

        assert ledger.allocator.issued_count == 0
        assert ledger.list_accounts() == []
