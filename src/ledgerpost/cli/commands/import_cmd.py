"""Bank CSV import command."""

import click

from ledgerpost.cli.error_handling import handle_domain_error
from ledgerpost.cli.formatting import account_label, echo_entries, format_amount
from ledgerpost.domain.csv_import import read_bank_transactions
from ledgerpost.domain.errors import DomainError
from ledgerpost.domain.journal import JournalEntryFactory
from ledgerpost.domain.ledger import InMemoryLedger
from ledgerpost.domain.processor import ProcessorConfig, TransactionProcessor


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--batch-size", type=click.IntRange(min=1), default=10, show_default=True)
@click.option("--dayfirst", is_flag=True, help="Read dates like 03/04/2024 as 3 April")
@click.option("--show-entries", is_flag=True, help="Print the journal entries of each transaction")
@click.option("--trial-balance", is_flag=True, help="Print debit and credit totals per account")
@click.option("--lenient", is_flag=True, help="Allow lines with unresolved accounts")
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    batch_size: int,
    dayfirst: bool,
    show_entries: bool,
    trial_balance: bool,
    lenient: bool,
):
    """Generate journal entries for every transaction in a bank CSV file."""
    account_config = ctx.obj["account_config"]
    account_names = ctx.obj["account_names"]

    try:
        read_result = read_bank_transactions(
            csv_file, category_accounts=account_config.category_accounts, dayfirst=dayfirst
        )
        factory = JournalEntryFactory(account_config.account_ids, strict=not lenient)
    except (DomainError, ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    ledger = InMemoryLedger()
    processor = TransactionProcessor(factory, ledger, ProcessorConfig(batch_size=batch_size))
    result = processor.process_transactions(read_result.transactions)

    if show_entries:
        for transaction_id in result.transaction_ids:
            posted = ledger.transactions[transaction_id]
            txn = posted.transaction
            click.echo(f"\n{txn.date.isoformat()}  {txn.description}  {format_amount(txn.amount)}")
            echo_entries(posted.journal_entries, account_names)

    if trial_balance:
        click.echo("\nTrial balance:")
        for account_id, (debits, credits) in ledger.trial_balance().items():
            label = account_label(account_id, account_names)
            click.echo(f"  {label:<40} {format_amount(debits):>12} {format_amount(credits):>12}")

    errors = read_result.errors + result.errors
    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    click.echo(f"  Skipped: {read_result.skipped + result.skipped} transactions")
    click.echo(f"  Failed: {result.failed + len(read_result.errors)} transactions")
    if errors:
        click.echo(f"  Errors: {len(errors)}")
        for error in errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
