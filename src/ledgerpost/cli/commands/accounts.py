"""Chart of accounts and account role commands."""

import click

from ledgerpost.domain.chart_of_accounts import CHART_OF_ACCOUNTS
from ledgerpost.domain.entities import AccountIds


@click.command("accounts")
@click.option("--roles", is_flag=True, help="Show the account configured for each journal role")
@click.pass_context
def list_accounts(ctx, roles: bool):
    """List the default chart of accounts or the configured account roles."""
    if roles:
        account_ids = ctx.obj["account_config"].account_ids
        account_names = ctx.obj["account_names"]
        for role in AccountIds.role_names():
            account_id = getattr(account_ids, AccountIds.field_for_role(role))
            if account_id is None:
                click.echo(f"{role:<22} (not configured)")
            else:
                name = account_names.get(account_id, "")
                click.echo(f"{role:<22} {account_id} {name}".rstrip())
        return

    current_type = None
    for account in CHART_OF_ACCOUNTS:
        if account.account_type != current_type:
            current_type = account.account_type
            click.echo(f"\n{current_type}")
        click.echo(f"  {account.code}  {account.name}")


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(list_accounts)
