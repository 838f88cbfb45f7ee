"""
Text rendering and input parsing for the presentation layer.

The core never prints; these helpers turn its values into display lines and
turn user input into Decimal amounts.
"""

from decimal import Decimal, InvalidOperation
from typing import List

from .models import Account, Transaction


def format_currency(amount: Decimal) -> str:
    """Format currency for display."""
    if amount < 0:
        return f"-${-amount:.2f}"
    return f"${amount:.2f}"


def parse_amount(amount_str: str) -> Decimal:
    """Parse amount, rate or limit input."""
    try:
        # Remove $ and commas
        clean_str = amount_str.replace('$', '').replace(',', '').strip()
        value = Decimal(clean_str)
    except (InvalidOperation, ValueError, AttributeError):
        raise ValueError(f"Invalid amount: {amount_str}")

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount_str}")
    return value


def account_summary_lines(account: Account) -> List[str]:
    """Render an account summary."""
    summary = account.summary()
    lines = [
        f"Account Number: {summary['account_number']}",
        f"Account Holder: {summary['holder_name']}",
        f"Balance: {format_currency(summary['balance'])}",
    ]
    if 'interest_rate' in summary:
        lines.append(f"Interest Rate: {summary['interest_rate']:.2f}%")
    if 'overdraft_limit' in summary:
        lines.append(f"Overdraft Limit: {format_currency(summary['overdraft_limit'])}")
    lines.append(f"Account Type: {summary['account_type']}")
    if 'overdrawn_by' in summary:
        lines.append(f"Overdrawn by: {format_currency(summary['overdrawn_by'])}")
    return lines


def transaction_lines(transaction: Transaction) -> List[str]:
    lines = [
        f"Date: {transaction.timestamp.strftime('%Y-%m-%d %H:%M')}",
        f"Type: {transaction.transaction_type.value.capitalize()}",
        f"Amount: {format_currency(transaction.amount)}",
        f"From: {transaction.from_account}",
    ]
    if transaction.to_account:
        lines.append(f"To: {transaction.to_account}")
    return lines
