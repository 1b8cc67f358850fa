"""Text rendering of journal entries for the terminal."""

from decimal import Decimal
from typing import Mapping, Optional

import click

from ledgerpost.domain.entities import JournalEntrySet


def format_amount(amount: Decimal) -> str:
    """Format a non-zero amount with two decimals; zero renders blank."""
    if not amount:
        return ""
    return f"{amount:,.2f}"


def account_label(account_id: Optional[str], account_names: Mapping[str, str]) -> str:
    """Render an account as "id name", or a marker when unresolved."""
    if account_id is None:
        return "<unresolved>"
    name = account_names.get(account_id)
    return f"{account_id} {name}" if name else account_id


def echo_entries(entry_set: JournalEntrySet, account_names: Mapping[str, str]) -> None:
    """Print journal entries as an aligned table followed by totals."""
    if entry_set.is_empty:
        click.echo("No journal entries (transfers are not booked).")
        return

    labels = [account_label(entry.account_id, account_names) for entry in entry_set]
    width = max(len("Account"), *(len(label) for label in labels))

    click.echo(f"{'Account':<{width}}  {'Debit':>12}  {'Credit':>12}  Description")
    click.echo("-" * (width + 42))
    for label, entry in zip(labels, entry_set):
        click.echo(
            f"{label:<{width}}  {format_amount(entry.debit_amount):>12}  "
            f"{format_amount(entry.credit_amount):>12}  {entry.description}"
        )
    click.echo("-" * (width + 42))
    click.echo(
        f"{'Total':<{width}}  {format_amount(entry_set.total_debits):>12}  "
        f"{format_amount(entry_set.total_credits):>12}"
    )
