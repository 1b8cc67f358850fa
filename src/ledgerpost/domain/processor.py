"""Batch processing of imported bank transactions into the ledger."""

from dataclasses import dataclass, field, replace
from typing import Callable, Optional
import time

from ledgerpost.config.logging import get_logger
from ledgerpost.domain.entities import (
    BankTransaction,
    JournalEntryTransaction,
    Polarity,
    PostedTransaction,
    TransactionKind,
    TransactionType,
)
from ledgerpost.domain.errors import DomainError
from ledgerpost.domain.journal import JournalEntryFactory
from ledgerpost.domain.ledger import LedgerWriter
from ledgerpost.domain.validation import validate_journal_entries

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProcessingProgress:
    """Progress snapshot reported after each batch."""

    total: int
    processed: int
    current_batch: int
    total_batches: int
    status: str


@dataclass
class ProcessorConfig:
    """Tuning knobs for TransactionProcessor."""

    batch_size: int = 10
    max_retries: int = 3
    retry_backoff: float = 1.0
    progress_callback: Optional[Callable[[ProcessingProgress], None]] = None


@dataclass
class ProcessingResult:
    """Outcome of processing a list of bank transactions."""

    imported: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    transaction_ids: list[str] = field(default_factory=list)


class TransactionProcessor:
    """Turn bank transactions into journal entries and write them in batches."""

    def __init__(
        self,
        factory: JournalEntryFactory,
        ledger: LedgerWriter,
        config: Optional[ProcessorConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the processor.

        Args:
            factory: Journal entry factory configured for the business
            ledger: Destination for transactions and entries
            config: Batch and retry settings
            sleep: Function used to wait between write retries
        """
        self.factory = factory
        self.ledger = ledger
        self.config = config or ProcessorConfig()
        self._sleep = sleep

        if self.config.batch_size < 1:
            raise ValueError("batch_size must be at least 1")

    def process_transactions(self, transactions: list[BankTransaction]) -> ProcessingResult:
        """Process bank transactions batch by batch.

        Args:
            transactions: Imported bank transactions

        Returns:
            ProcessingResult with counts, errors and new transaction IDs
        """
        result = ProcessingResult()
        batches = create_batches(transactions, self.config.batch_size)
        seen_external_ids: set[str] = set()
        processed = 0

        for batch_number, batch in enumerate(batches, start=1):
            self._report_progress(
                ProcessingProgress(
                    total=len(transactions),
                    processed=processed,
                    current_batch=batch_number,
                    total_batches=len(batches),
                    status="processing",
                )
            )

            posted = []
            for txn in batch:
                # Duplicates within the file or already in the ledger
                if txn.external_id and (
                    txn.external_id in seen_external_ids
                    or self.ledger.transaction_exists(txn.external_id)
                ):
                    result.skipped += 1
                    continue

                try:
                    posted.append(self.post(txn))
                except DomainError as e:
                    result.failed += 1
                    result.errors.append(f"Batch {batch_number}: {txn.description}: {e}")
                    continue

                if txn.external_id:
                    seen_external_ids.add(txn.external_id)

            if posted:
                try:
                    transaction_ids = self._write_with_retry(posted)
                except Exception as e:
                    # Nothing was written, so a later row may still claim these IDs.
                    seen_external_ids.difference_update(
                        p.transaction.external_id for p in posted if p.transaction.external_id
                    )
                    logger.error("batch_write_failed", batch=batch_number, error=str(e))
                    result.failed += len(posted)
                    result.errors.append(f"Batch {batch_number}: {len(posted)} transactions failed: {e}")
                else:
                    result.imported += len(transaction_ids)
                    result.transaction_ids.extend(transaction_ids)

            processed += len(batch)
            logger.info("batch_processed", batch=batch_number, size=len(batch))

        self._report_progress(
            ProcessingProgress(
                total=len(transactions),
                processed=len(transactions),
                current_batch=len(batches),
                total_batches=len(batches),
                status="completed",
            )
        )
        return result

    def post(self, txn: BankTransaction) -> PostedTransaction:
        """Build and validate the journal entries for one bank transaction.

        Raises:
            DomainError: If entries cannot be generated or do not validate
        """
        journal_txn = self.build_journal_transaction(txn)
        entries = self.factory.create_journal_entries(journal_txn)
        validate_journal_entries(entries, allow_empty=True)
        return PostedTransaction(transaction=txn, journal_entries=entries)

    def build_journal_transaction(self, txn: BankTransaction) -> JournalEntryTransaction:
        """Translate a bank transaction into factory input."""
        polarity = Polarity.CREDIT if txn.kind is TransactionKind.INCOME else Polarity.DEBIT

        transaction_type = txn.transaction_type
        if transaction_type is None and txn.kind is TransactionKind.TRANSFER:
            transaction_type = TransactionType.TRANSFER

        journal_txn = JournalEntryTransaction(
            description=txn.description,
            amount=abs(txn.amount),
            polarity=polarity,
            transaction_type=transaction_type,
            category_id=txn.category_id,
            tax_amount=txn.tax_amount,
            principal_amount=txn.principal_amount,
            interest_amount=txn.interest_amount,
        )

        if journal_txn.category_id is None:
            category_id = self.default_category_id(self.factory.resolve_type(journal_txn))
            if category_id:
                journal_txn = replace(journal_txn, category_id=category_id)
        return journal_txn

    def default_category_id(self, transaction_type: TransactionType) -> Optional[str]:
        """Category used for uncategorized imports of plain income or expense."""
        accounts = self.factory.accounts
        if transaction_type is TransactionType.EXPENSE:
            return accounts.misc_expense_id
        if transaction_type is TransactionType.INCOME:
            return accounts.other_income_id or accounts.sales_revenue_id
        return None

    def _write_with_retry(self, posted: list[PostedTransaction]) -> list[str]:
        attempt = 1
        while True:
            try:
                return self.ledger.write_batch(posted)
            except Exception as e:
                if attempt >= self.config.max_retries:
                    raise
                delay = (2**attempt) * self.config.retry_backoff
                logger.warning(
                    "batch_write_retry",
                    attempt=attempt + 1,
                    max_retries=self.config.max_retries,
                    delay=delay,
                    error=str(e),
                )
                self._sleep(delay)
                attempt += 1

    def _report_progress(self, progress: ProcessingProgress) -> None:
        if self.config.progress_callback:
            self.config.progress_callback(progress)


def create_batches(items: list, batch_size: int) -> list[list]:
    """Split items into consecutive batches of at most batch_size."""
    return [items[i : i + batch_size] for i in range(0, len(items), batch_size)]
