"""Tests for batch processing of bank transactions."""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from ledgerpost.domain.entities import (
    BankTransaction,
    JournalEntrySet,
    PostedTransaction,
    TransactionKind,
    TransactionType,
)
from ledgerpost.domain.journal import JournalEntryFactory
from ledgerpost.domain.ledger import InMemoryLedger
from ledgerpost.domain.processor import (
    ProcessorConfig,
    TransactionProcessor,
    create_batches,
)


class FlakyLedger(InMemoryLedger):
    """In-memory ledger whose first writes fail."""

    def __init__(self, failures):
        super().__init__()
        self.failures = failures
        self.write_calls = 0

    def write_batch(self, batch):
        self.write_calls += 1
        if self.write_calls <= self.failures:
            raise RuntimeError("database unavailable")
        return super().write_batch(batch)


def bank_txn(description, amount, kind=TransactionKind.EXPENSE, **kwargs):
    return BankTransaction(
        date=date(2024, 3, 1),
        description=description,
        amount=Decimal(str(amount)),
        kind=kind,
        **kwargs,
    )


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_processor(factory, sleeps):
    """Build a processor with a recorded sleep function."""

    def _make(ledger=None, **config):
        return TransactionProcessor(
            factory, ledger or InMemoryLedger(), ProcessorConfig(**config), sleep=sleeps.append
        )

    return _make


def test_imports_all_transactions(make_processor):
    """Test that every transaction is written with its entries."""
    ledger = InMemoryLedger()
    processor = make_processor(ledger)
    result = processor.process_transactions(
        [
            bank_txn("Consulting fee", 500, TransactionKind.INCOME),
            bank_txn("Office rent", 1200, category_id="rent"),
            bank_txn("Loan payment", 1000),
        ]
    )

    assert result.imported == 3
    assert result.failed == 0
    assert result.skipped == 0
    assert result.errors == []
    assert len(result.transaction_ids) == 3
    for transaction_id in result.transaction_ids:
        assert ledger.get_entries(transaction_id).is_balanced


def test_default_expense_category(make_processor):
    """Test that uncategorized expenses go to misc expense."""
    journal_txn = make_processor().build_journal_transaction(bank_txn("Stamps", 9))
    assert journal_txn.category_id == "misc"


def test_default_income_category(make_processor):
    """Test that uncategorized income goes to other income."""
    journal_txn = make_processor().build_journal_transaction(
        bank_txn("Stripe payout", 90, TransactionKind.INCOME)
    )
    assert journal_txn.category_id == "other-income"


def test_default_income_category_falls_back_to_sales(minimal_account_ids):
    """Test sales revenue as default income category without other income."""
    processor = TransactionProcessor(JournalEntryFactory(minimal_account_ids), InMemoryLedger())
    journal_txn = processor.build_journal_transaction(
        bank_txn("Stripe payout", 90, TransactionKind.INCOME)
    )
    assert journal_txn.category_id == "sales"


def test_no_default_category_for_other_types(make_processor):
    """Test that specialised types keep their own accounts."""
    processor = make_processor()
    assert processor.build_journal_transaction(bank_txn("Loan payment", 100)).category_id is None
    assert processor.build_journal_transaction(bank_txn("New computer", 100)).category_id is None


def test_explicit_category_is_kept(make_processor):
    """Test that a category from the import is not replaced."""
    journal_txn = make_processor().build_journal_transaction(
        bank_txn("Coffee", 4, category_id="meals")
    )
    assert journal_txn.category_id == "meals"


def test_polarity_from_kind(make_processor):
    """Test that the import kind sets the bank-statement direction."""
    processor = make_processor()
    income = processor.build_journal_transaction(bank_txn("Sale", 1, TransactionKind.INCOME))
    expense = processor.build_journal_transaction(bank_txn("Sale", 1, TransactionKind.EXPENSE))
    assert income.polarity.value == "credit"
    assert expense.polarity.value == "debit"


def test_transfer_kind_books_nothing(make_processor):
    """Test that transfer rows are written with no journal entries."""
    ledger = InMemoryLedger()
    result = make_processor(ledger).process_transactions(
        [bank_txn("Move to savings", 5000, TransactionKind.TRANSFER)]
    )
    assert result.imported == 1
    assert ledger.get_entries(result.transaction_ids[0]) == JournalEntrySet()


def test_explicit_type_is_passed_through(make_processor):
    """Test that an imported transaction type reaches the factory."""
    journal_txn = make_processor().build_journal_transaction(
        bank_txn("Invoice 17", 300, TransactionKind.INCOME, transaction_type=TransactionType.CUSTOMER_PAYMENT)
    )
    assert journal_txn.transaction_type is TransactionType.CUSTOMER_PAYMENT


def test_duplicates_are_skipped(make_processor):
    """Test deduplication by external ID within the file and against the ledger."""
    ledger = InMemoryLedger()
    ledger.write_batch(
        [PostedTransaction(transaction=bank_txn("Old", 1, external_id="old-1"))]
    )
    result = make_processor(ledger).process_transactions(
        [
            bank_txn("Coffee", 4, external_id="x-1"),
            bank_txn("Coffee", 4, external_id="x-1"),
            bank_txn("Old", 1, external_id="old-1"),
            bank_txn("No id", 2),
        ]
    )
    assert result.imported == 2
    assert result.skipped == 2


def test_generation_failure_fails_one_transaction(minimal_account_ids, sleeps):
    """Test that a transaction with unresolved accounts fails alone."""
    processor = TransactionProcessor(
        JournalEntryFactory(minimal_account_ids), InMemoryLedger(), sleep=sleeps.append
    )
    result = processor.process_transactions(
        [bank_txn("Visa cc payment", 50), bank_txn("Stamps", 9)]
    )
    assert result.imported == 1
    assert result.failed == 1
    assert result.errors == ["Batch 1: Visa cc payment: Journal entry 1 has no account"]


def test_strict_failure_fails_one_transaction(minimal_account_ids):
    """Test that strict mode errors are collected per transaction."""
    processor = TransactionProcessor(
        JournalEntryFactory(minimal_account_ids, strict=True), InMemoryLedger()
    )
    result = processor.process_transactions([bank_txn("Payroll", 3000), bank_txn("Sale", 5, TransactionKind.INCOME)])
    assert result.imported == 1
    assert result.failed == 1
    assert "salaries_wages" in result.errors[0]


def test_write_retried_with_backoff(make_processor, sleeps):
    """Test exponential backoff between write attempts."""
    ledger = FlakyLedger(failures=2)
    with capture_logs() as logs:
        result = make_processor(ledger, max_retries=3).process_transactions([bank_txn("Stamps", 9)])

    assert result.imported == 1
    assert ledger.write_calls == 3
    assert sleeps == [2.0, 4.0]
    assert [log["event"] for log in logs].count("batch_write_retry") == 2


def test_write_failure_fails_whole_batch(make_processor, sleeps):
    """Test that a batch failing every attempt counts all its transactions as failed."""
    ledger = FlakyLedger(failures=10)
    result = make_processor(ledger, batch_size=2, max_retries=3).process_transactions(
        [bank_txn("Stamps", 9), bank_txn("Paper", 12), bank_txn("Toner", 40)]
    )

    assert result.imported == 0
    assert result.failed == 3
    assert ledger.write_calls == 6
    assert result.errors[0] == "Batch 1: 2 transactions failed: database unavailable"
    assert result.errors[1] == "Batch 2: 1 transactions failed: database unavailable"


def test_later_batches_continue_after_failure(make_processor):
    """Test that one failed batch does not stop the import."""
    ledger = FlakyLedger(failures=1)
    result = make_processor(ledger, batch_size=1, max_retries=1).process_transactions(
        [bank_txn("Stamps", 9), bank_txn("Paper", 12)]
    )
    assert result.failed == 1
    assert result.imported == 1


def test_retry_backoff_scales_delay(make_processor, sleeps):
    """Test the configurable backoff base."""
    make_processor(FlakyLedger(failures=1), retry_backoff=0.5).process_transactions(
        [bank_txn("Stamps", 9)]
    )
    assert sleeps == [1.0]


def test_progress_reported_per_batch(make_processor):
    """Test progress callback snapshots."""
    progress = []
    make_processor(batch_size=2, progress_callback=progress.append).process_transactions(
        [bank_txn(f"Item {i}", i + 1) for i in range(5)]
    )

    assert [p.current_batch for p in progress] == [1, 2, 3, 3]
    assert [p.processed for p in progress] == [0, 2, 4, 5]
    assert all(p.total == 5 and p.total_batches == 3 for p in progress)
    assert [p.status for p in progress] == ["processing"] * 3 + ["completed"]


def test_empty_input(make_processor):
    """Test processing nothing."""
    progress = []
    result = make_processor(progress_callback=progress.append).process_transactions([])
    assert result.imported == 0
    assert len(progress) == 1
    assert progress[0].status == "completed"


def test_invalid_batch_size(factory):
    """Test that a batch size below one is rejected."""
    with pytest.raises(ValueError, match="batch_size"):
        TransactionProcessor(factory, InMemoryLedger(), ProcessorConfig(batch_size=0))


def test_create_batches():
    """Test batch splitting."""
    assert create_batches([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert create_batches([], 10) == []


def test_failed_row_does_not_claim_external_id(minimal_account_ids):
    """Test that a row failing generation leaves its external ID free for a later row."""
    processor = TransactionProcessor(
        JournalEntryFactory(minimal_account_ids, strict=True), InMemoryLedger()
    )
    result = processor.process_transactions(
        [
            bank_txn("Office chair furniture", 250, external_id="x-1"),
            bank_txn("Office chair furniture", 250, external_id="x-1", category_id="furniture"),
        ]
    )
    assert result.imported == 1
    assert result.failed == 1
    assert result.skipped == 0


def test_failed_write_releases_external_ids(make_processor):
    """Test that IDs of a batch that was never written can be imported later."""
    ledger = FlakyLedger(failures=1)
    result = make_processor(ledger, batch_size=1, max_retries=1).process_transactions(
        [bank_txn("Stamps", 9, external_id="x-1"), bank_txn("Stamps", 9, external_id="x-1")]
    )
    assert result.failed == 1
    assert result.imported == 1
    assert result.skipped == 0
    assert ledger.transaction_exists("x-1")
