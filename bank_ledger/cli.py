"""
CLI interface for the bank ledger.

This module provides an interactive menu for managing accounts and
transactions held in memory for the lifetime of the session.
"""

import click
from decimal import Decimal
from typing import Optional

from . import create_ledger
from .config import LedgerConfig, configure_logging
from .exceptions import LedgerError
from .formatting import account_summary_lines, format_currency, parse_amount, transaction_lines
from .ledger import Ledger
from .models import Account, AccountType, OperationResult


MENU = """
--- Bank Menu ---
1. Create Account
2. Deposit
3. Withdraw
4. Transfer Money
5. View Account Summary
6. View All Accounts
7. View Transaction History
8. Apply Interest (Savings)
9. Exit"""


class BankShell:
    """Menu-driven wrapper around a Ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize shell with a ledger."""
        self.ledger = ledger
        self.actions = {
            '1': self.create_account,
            '2': self.deposit,
            '3': self.withdraw,
            '4': self.transfer,
            '5': self.show_account,
            '6': self.list_accounts,
            '7': self.list_transactions,
            '8': self.apply_interest,
        }

    def ask(self, text: str) -> str:
        return click.prompt(text, default='', show_default=False)

    def ask_amount(self, text: str) -> Optional[Decimal]:
        """Prompt for an amount; report and return None when it does not parse."""
        try:
            return parse_amount(self.ask(text))
        except ValueError:
            click.echo("Invalid amount.", err=True)
            return None

    def ask_account(self, text: str = "Enter account number") -> Optional[Account]:
        account = self.ledger.find_account(self.ask(text).strip())
        if not account:
            click.echo("Account not found.", err=True)
        return account

    def run(self) -> None:
        """Run the menu loop until the user exits."""
        while True:
            click.echo(MENU)
            choice = self.ask("Choose an option").strip()
            if choice == '9':
                click.echo("Goodbye!")
                return

            action = self.actions.get(choice)
            if action is None:
                click.echo("Invalid option.", err=True)
                continue
            action()

    def create_account(self) -> None:
        holder_name = self.ask("Enter account holder name")

        click.echo("Select account type:")
        click.echo("1. Regular Account")
        click.echo("2. Savings Account")
        click.echo("3. Checking Account")
        choice = self.ask("Choose account type").strip()

        account_type = AccountType.PLAIN
        options = {}
        if choice == '2':
            rate = self._ask_parameter("Enter interest rate (%)", "interest rate")
            if rate is not None:
                account_type = AccountType.SAVINGS
                options['interest_rate'] = rate
        elif choice == '3':
            limit = self._ask_parameter("Enter overdraft limit", "overdraft limit")
            if limit is not None:
                account_type = AccountType.CHECKING
                options['overdraft_limit'] = limit
        elif choice != '1':
            click.echo("Invalid choice. Creating regular account.")

        try:
            account = self.ledger.open_account(holder_name, account_type, **options)
        except LedgerError as e:
            click.echo(f"❌ Error: {e}", err=True)
            return

        click.echo(f"✅ Account {account.account_number} created successfully!")

    def _ask_parameter(self, text: str, name: str) -> Optional[Decimal]:
        try:
            return parse_amount(self.ask(text))
        except ValueError:
            click.echo(f"Invalid {name}. Creating regular account.")
            return None

    def deposit(self) -> None:
        account = self.ask_account()
        if not account:
            return
        amount = self.ask_amount("Enter amount to deposit")
        if amount is None:
            return

        result = account.deposit(amount, self.ledger)
        self.report(result, f"Deposited {format_currency(amount)}. "
                            f"New balance: {format_currency(account.balance)}")

    def withdraw(self) -> None:
        account = self.ask_account()
        if not account:
            return
        amount = self.ask_amount("Enter amount to withdraw")
        if amount is None:
            return

        result = account.withdraw(amount, self.ledger)
        self.report(result, f"Withdrawn {format_currency(amount)}. "
                            f"New balance: {format_currency(account.balance)}")

    def transfer(self) -> None:
        source = self.ledger.find_account(self.ask("Enter source account number").strip())
        destination = self.ledger.find_account(
            self.ask("Enter destination account number").strip()
        )
        if not source or not destination:
            click.echo("One or both accounts not found.", err=True)
            return
        amount = self.ask_amount("Enter amount to transfer")
        if amount is None:
            return

        result = source.transfer(amount, destination, self.ledger)
        self.report(result, f"Transferred {format_currency(amount)} "
                            f"to account {destination.account_number}")

    def show_account(self) -> None:
        account = self.ask_account()
        if account:
            for line in account_summary_lines(account):
                click.echo(line)

    def list_accounts(self) -> None:
        accounts = self.ledger.list_accounts()
        if not accounts:
            click.echo("No accounts found.")
            return

        click.echo("\n--- All Accounts ---")
        for account in accounts:
            for line in account_summary_lines(account):
                click.echo(line)
            click.echo("---")

    def list_transactions(self) -> None:
        account_number = self.ask("Enter account number (blank for all)").strip()
        if account_number:
            transactions = self.ledger.transactions_for(account_number)
        else:
            transactions = self.ledger.list_transactions()
        if not transactions:
            click.echo("No transactions found.")
            return

        click.echo("\n--- Transaction History ---")
        for txn in transactions:
            for line in transaction_lines(txn):
                click.echo(line)
            click.echo("---")

    def apply_interest(self) -> None:
        account = self.ledger.find_account(self.ask("Enter savings account number").strip())
        if not account or not account.is_savings:
            click.echo("Account not found or not a savings account.", err=True)
            return

        result = account.apply_interest(self.ledger)
        self.report(result, f"Interest applied: {format_currency(result.amount)}. "
                            f"New balance: {format_currency(account.balance)}")

    def report(self, result: OperationResult, message: str) -> None:
        """Echo the outcome of an operation."""
        if not result:
            click.echo(f"❌ {result.reason}", err=True)
            return

        click.echo(f"✅ {message}")
        if result.warning:
            click.echo(f"⚠️ Warning: {result.warning}")


@click.group()
@click.option('--seed', type=int, default=None, help='Seed for reproducible account numbers')
@click.option('--log-level', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (default: WARNING)')
@click.pass_context
def cli(ctx, seed, log_level):
    """Bank Ledger CLI"""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj['config'] = LedgerConfig(seed=seed)


@cli.command()
@click.pass_context
def shell(ctx):
    """Run the interactive bank menu."""
    ledger = create_ledger(ctx.obj['config'])
    BankShell(ledger).run()


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
