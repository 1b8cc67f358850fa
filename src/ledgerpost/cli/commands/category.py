"""Bank category mapping command."""

import click

from ledgerpost.domain.category_mapping import (
    BankCategory,
    get_transaction_kind,
    get_transaction_type_from_category,
    map_category_with_merchant,
    should_ignore_transaction,
)


@click.command("map-category")
@click.argument("primary")
@click.argument("detailed", required=False, default="")
@click.option("--merchant", help="Merchant name (known merchants override the category)")
@click.option("--description", help="Transaction description")
@click.pass_context
def map_category(ctx, primary: str, detailed: str, merchant: str | None, description: str | None):
    """Show how a bank category is booked.

    Examples:
        ledgerpost map-category FOOD_AND_DRINK FOOD_AND_DRINK_COFFEE
        ledgerpost map-category GENERAL_SERVICES --merchant "Adobe Inc"
    """
    bank_category = BankCategory(primary=primary.upper(), detailed=detailed.upper())

    if should_ignore_transaction(bank_category):
        click.echo("Ignored: account transfers are not booked")
        return

    category_name = map_category_with_merchant(bank_category, merchant)
    account_id = ctx.obj["account_config"].category_account_id(category_name)
    transaction_type = get_transaction_type_from_category(bank_category, description)

    click.echo(f"Category: {category_name}")
    if account_id:
        name = ctx.obj["account_names"].get(account_id, "")
        click.echo(f"Account: {account_id} {name}".rstrip())
    else:
        click.echo("Account: (not mapped)")
    click.echo(f"Kind: {get_transaction_kind(bank_category).value}")
    click.echo(f"Transaction type: {transaction_type.value}")


def register_commands(cli):
    """Register map-category command with main CLI."""
    cli.add_command(map_category)
