"""Journal entry preview command."""

import click

from ledgerpost.cli.error_handling import handle_domain_error
from ledgerpost.cli.formatting import echo_entries
from ledgerpost.domain.entities import JournalEntryTransaction, Polarity, TransactionType
from ledgerpost.domain.errors import DomainError
from ledgerpost.domain.journal import JournalEntryFactory
from ledgerpost.utils.amount_parser import parse_amount, parse_optional_amount


@click.command("journal")
@click.argument("description")
@click.argument("amount")
@click.option(
    "--credit/--debit",
    "is_credit",
    default=None,
    help="Bank-statement direction (default: positive amounts are credits)",
)
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Transaction type (inferred from the description if omitted)",
)
@click.option("--category", help="Account ID the transaction is categorized to")
@click.option("--tax", help="Sales tax included in the amount")
@click.option("--principal", help="Loan principal portion")
@click.option("--interest", help="Loan interest portion")
@click.option("--lenient", is_flag=True, help="Allow lines with unresolved accounts")
@click.pass_context
def journal(
    ctx,
    description: str,
    amount: str,
    is_credit: bool | None,
    transaction_type: str | None,
    category: str | None,
    tax: str | None,
    principal: str | None,
    interest: str | None,
    lenient: bool,
):
    """Show the journal entries for a single bank transaction.

    Examples:
        ledgerpost journal "Client invoice 1042" 106 --tax 6
        ledgerpost journal "Dell computer" -- -1499.99
        ledgerpost journal "Bank loan pmt" 1000 --debit --principal 850 --interest 150
    """
    account_config = ctx.obj["account_config"]

    try:
        txn_amount = parse_amount(amount)
        tax_amount = parse_optional_amount(tax)
        principal_amount = parse_optional_amount(principal)
        interest_amount = parse_optional_amount(interest)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if is_credit is None:
        is_credit = txn_amount >= 0

    transaction = JournalEntryTransaction(
        description=description,
        amount=abs(txn_amount),
        polarity=Polarity.CREDIT if is_credit else Polarity.DEBIT,
        transaction_type=transaction_type,
        category_id=category,
        tax_amount=tax_amount,
        principal_amount=principal_amount,
        interest_amount=interest_amount,
    )

    try:
        factory = JournalEntryFactory(account_config.account_ids, strict=not lenient)
        resolved_type = factory.resolve_type(transaction)
        entries = factory.create_journal_entries(transaction)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Type: {resolved_type.value}")
    echo_entries(entries, ctx.obj["account_names"])


def register_commands(cli):
    """Register journal command with main CLI."""
    cli.add_command(journal)
