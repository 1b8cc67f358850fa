"""Journal entry validation."""

from decimal import Decimal

from ledgerpost.domain.entities import JournalEntrySet
from ledgerpost.domain.errors import UnbalancedEntriesError, ValidationError, unbalanced_entries

BALANCE_TOLERANCE = Decimal("0.01")


def validate_journal_entries(
    entry_set: JournalEntrySet, minimum_lines: int = 2, allow_empty: bool = False
) -> None:
    """Check that a journal entry set can be persisted.

    Args:
        entry_set: Journal entries to check
        minimum_lines: Fewest lines a non-empty set may have
        allow_empty: Accept a set with no lines (e.g. suppressed transfers)

    Raises:
        ValidationError: If a line is malformed or there are too few lines
        UnbalancedEntriesError: If debits and credits differ by more than a cent
    """
    if entry_set.is_empty and allow_empty:
        return

    if len(entry_set) < minimum_lines:
        raise ValidationError(f"At least {minimum_lines} journal entries are required")

    for index, entry in enumerate(entry_set, start=1):
        if entry.debit_amount < 0 or entry.credit_amount < 0:
            raise ValidationError(f"Journal entry {index} has a negative amount")
        if not entry.account_id:
            raise ValidationError(f"Journal entry {index} has no account")

    total_debits = entry_set.total_debits
    total_credits = entry_set.total_credits
    if abs(total_debits - total_credits) >= BALANCE_TOLERANCE:
        raise UnbalancedEntriesError(unbalanced_entries(total_debits, total_credits))
