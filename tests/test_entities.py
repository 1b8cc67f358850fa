"""Tests for domain entities and errors."""

from dataclasses import FrozenInstanceError, fields
from decimal import Decimal

import pytest

from ledgerpost.domain.entities import (
    AccountIds,
    JournalEntryInput,
    JournalEntrySet,
    TransactionType,
)
from ledgerpost.domain.errors import (
    ConfigurationError,
    DomainError,
    UnbalancedEntriesError,
    UnresolvedAccountError,
    ValidationError,
)


def test_role_names_match_fields():
    """Test that every role maps back to its field."""
    names = AccountIds.role_names()
    assert names[0] == "cash"
    assert "misc_expense" in names
    assert [AccountIds.field_for_role(name) for name in names] == [f.name for f in fields(AccountIds)]


def test_account_ids_are_frozen():
    """Test that account configuration cannot change after construction."""
    ids = AccountIds(cash_account_id="cash")
    with pytest.raises(FrozenInstanceError):
        ids.cash_account_id = "other"


def test_transaction_type_values():
    """Test that type values are the lowercase wire names."""
    assert TransactionType("loan_payment") is TransactionType.LOAN_PAYMENT
    assert TransactionType.TAX_COLLECTION == "tax_collection"
    assert len(TransactionType) == 12


def test_journal_entry_set_totals():
    """Test totals and balance check."""
    entries = JournalEntrySet(
        (
            JournalEntryInput("cash", Decimal("106"), Decimal("0"), "a"),
            JournalEntryInput("sales", Decimal("0"), Decimal("100"), "b"),
            JournalEntryInput("tax", Decimal("0"), Decimal("6"), "c"),
        )
    )
    assert entries.total_debits == Decimal("106")
    assert entries.total_credits == Decimal("106")
    assert entries.is_balanced
    assert not entries.is_empty
    assert len(entries) == 3
    assert [e.account_id for e in entries] == ["cash", "sales", "tax"]


def test_empty_journal_entry_set():
    """Test the empty set."""
    entries = JournalEntrySet()
    assert entries.is_empty
    assert entries.is_balanced
    assert entries.total_debits == Decimal("0")


def test_error_hierarchy():
    """Test that domain errors are ValueErrors."""
    assert issubclass(DomainError, ValueError)
    assert issubclass(ValidationError, DomainError)
    assert issubclass(ConfigurationError, DomainError)
    assert issubclass(UnresolvedAccountError, DomainError)
    assert issubclass(UnbalancedEntriesError, ValidationError)


def test_unresolved_account_error_fields():
    """Test that the missing role is available to callers."""
    error = UnresolvedAccountError("loans_payable", "loan_payment")
    assert error.role == "loans_payable"
    assert error.transaction_type == "loan_payment"
    assert "loans_payable" in str(error)
