"""Tests for journal entry validation."""

from decimal import Decimal

import pytest

from ledgerpost.domain.entities import JournalEntryInput, JournalEntrySet
from ledgerpost.domain.errors import UnbalancedEntriesError, ValidationError
from ledgerpost.domain.validation import validate_journal_entries


def entry(account_id, debit="0", credit="0"):
    return JournalEntryInput(
        account_id=account_id,
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        description="Test",
    )


def test_balanced_entries_pass():
    """Test that a balanced two-line set is valid."""
    validate_journal_entries(JournalEntrySet((entry("cash", debit="10"), entry("sales", credit="10"))))


def test_sub_cent_difference_is_tolerated():
    """Test the one-cent balance tolerance."""
    entries = JournalEntrySet((entry("cash", debit="10.004"), entry("sales", credit="10")))
    validate_journal_entries(entries)


def test_unbalanced_entries_fail():
    """Test that a difference of a cent or more is rejected."""
    entries = JournalEntrySet((entry("cash", debit="10.01"), entry("sales", credit="10")))
    with pytest.raises(UnbalancedEntriesError, match="Total debits must equal total credits"):
        validate_journal_entries(entries)


def test_unbalanced_is_a_validation_error():
    """Test the error hierarchy."""
    entries = JournalEntrySet((entry("cash", debit="5"), entry("sales", credit="1")))
    with pytest.raises(ValidationError):
        validate_journal_entries(entries)


def test_too_few_lines():
    """Test the minimum line count."""
    with pytest.raises(ValidationError, match="At least 2"):
        validate_journal_entries(JournalEntrySet((entry("cash"),)))


def test_empty_set_rejected_by_default():
    """Test that an empty set needs allow_empty."""
    with pytest.raises(ValidationError):
        validate_journal_entries(JournalEntrySet())
    validate_journal_entries(JournalEntrySet(), allow_empty=True)


def test_custom_minimum():
    """Test a larger minimum line count."""
    entries = JournalEntrySet((entry("cash", debit="1"), entry("sales", credit="1")))
    with pytest.raises(ValidationError, match="At least 3"):
        validate_journal_entries(entries, minimum_lines=3)


def test_negative_amount():
    """Test that negative amounts are rejected."""
    entries = JournalEntrySet((entry("cash", debit="-1"), entry("sales", credit="-1")))
    with pytest.raises(ValidationError, match="negative"):
        validate_journal_entries(entries)


def test_missing_account():
    """Test that unresolved lines cannot be persisted."""
    entries = JournalEntrySet((entry(None, debit="1"), entry("cash", credit="1")))
    with pytest.raises(ValidationError, match="Journal entry 1 has no account"):
        validate_journal_entries(entries)


def test_factory_output_validates(factory, make_transaction):
    """Test that factory output passes validation."""
    for description in ("Consulting fee", "Loan payment", "Office supplies"):
        polarity = "credit" if description == "Consulting fee" else "debit"
        result = factory.create_journal_entries(make_transaction(description, "87.65", polarity))
        validate_journal_entries(result)
