"""Main CLI entry point."""

import click

from ledgerpost.config.accounts import default_account_config, load_account_config
from ledgerpost.config.logging import configure_logging
from ledgerpost.domain.chart_of_accounts import default_chart
from ledgerpost.domain.errors import DomainError

# Import and register all commands at module level
from ledgerpost.cli.commands import accounts, category, import_cmd, journal


@click.group()
@click.option(
    "--accounts",
    "accounts_path",
    type=click.Path(),
    help="YAML account role map (overrides LEDGERPOST_ACCOUNTS environment variable)",
    envvar="LEDGERPOST_ACCOUNTS",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERPOST_LOG_LEVEL",
    help="Log level",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default="console",
    show_default=True,
    envvar="LEDGERPOST_LOG_FORMAT",
    help="Log output format",
)
@click.pass_context
def cli(ctx, accounts_path: str | None, log_level: str, log_format: str):
    """ledgerpost - Double-entry journal entries for bank transactions.

    Classify bank transactions and turn them into balanced debit and credit
    lines against a small-business chart of accounts.
    """
    ctx.ensure_object(dict)

    # Only load configuration when a command actually runs (not for --help)
    if ctx.invoked_subcommand is None:
        return

    configure_logging(level=log_level.upper(), format=log_format)

    try:
        if accounts_path:
            ctx.obj["account_config"] = load_account_config(accounts_path)
            ctx.obj["account_names"] = {}
        else:
            ctx.obj["account_config"] = default_account_config()
            ctx.obj["account_names"] = {a.id: a.name for a in default_chart()}
    except (DomainError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


# Register all commands
journal.register_commands(cli)
import_cmd.register_commands(cli)
accounts.register_commands(cli)
category.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
