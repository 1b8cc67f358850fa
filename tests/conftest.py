"""Shared pytest fixtures for ledgerpost tests."""

import logging
from decimal import Decimal

import pytest
import structlog

from ledgerpost.domain.entities import AccountIds, JournalEntryTransaction, Polarity
from ledgerpost.domain.journal import JournalEntryFactory


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def account_ids():
    """Account role configuration with every role filled."""
    return AccountIds(
        cash_account_id="cash",
        accounts_receivable_id="ar",
        inventory_id="inventory",
        fixed_assets_id="fixed-assets",
        accounts_payable_id="ap",
        credit_cards_payable_id="cc-payable",
        sales_tax_payable_id="sales-tax",
        payroll_tax_payable_id="payroll-tax",
        loans_payable_id="loans",
        sales_revenue_id="sales",
        service_revenue_id="service",
        other_income_id="other-income",
        salaries_wages_id="wages",
        interest_expense_id="interest",
        misc_expense_id="misc",
    )


@pytest.fixture
def minimal_account_ids():
    """Only the accounts the factory insists on."""
    return AccountIds(cash_account_id="cash", sales_revenue_id="sales", misc_expense_id="misc")


@pytest.fixture
def factory(account_ids):
    """Create a lenient JournalEntryFactory with every role configured."""
    return JournalEntryFactory(account_ids)


@pytest.fixture
def make_transaction():
    """Build a JournalEntryTransaction from plain values."""

    def _make(description, amount, polarity="debit", **kwargs):
        for key in ("tax_amount", "principal_amount", "interest_amount"):
            if kwargs.get(key) is not None:
                kwargs[key] = Decimal(str(kwargs[key]))
        return JournalEntryTransaction(
            description=description,
            amount=Decimal(str(amount)),
            polarity=Polarity(polarity),
            **kwargs,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(content, name="statement.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
