"""Ledger writer interface and in-memory implementation."""

from abc import ABC, abstractmethod
from collections import defaultdict
from decimal import Decimal
from typing import Optional
import uuid

from ledgerpost.domain.entities import JournalEntrySet, PostedTransaction


class LedgerWriter(ABC):
    """Abstract destination for transactions and their journal entries."""

    @abstractmethod
    def transaction_exists(self, external_id: str) -> bool:
        """Check whether a transaction with this external ID was already written."""
        pass

    @abstractmethod
    def write_batch(self, batch: list[PostedTransaction]) -> list[str]:
        """Write transactions with their journal entries.

        The whole batch is written or nothing is. Returns the new
        transaction IDs in batch order.
        """
        pass


class InMemoryLedger(LedgerWriter):
    """Ledger kept in process memory, used by the CLI and tests."""

    def __init__(self):
        self.transactions: dict[str, PostedTransaction] = {}
        self._external_ids: dict[str, str] = {}

    def transaction_exists(self, external_id: str) -> bool:
        return external_id in self._external_ids

    def write_batch(self, batch: list[PostedTransaction]) -> list[str]:
        external_ids = [p.transaction.external_id for p in batch if p.transaction.external_id]
        if len(set(external_ids)) != len(external_ids):
            raise ValueError("Batch contains duplicate external IDs")
        for external_id in external_ids:
            if external_id in self._external_ids:
                raise ValueError(f"Transaction with external_id '{external_id}' already exists")

        transaction_ids = []
        for posted in batch:
            transaction_id = str(uuid.uuid4())
            self.transactions[transaction_id] = posted
            if posted.transaction.external_id:
                self._external_ids[posted.transaction.external_id] = transaction_id
            transaction_ids.append(transaction_id)
        return transaction_ids

    def get_entries(self, transaction_id: str) -> Optional[JournalEntrySet]:
        """Get the journal entries written for a transaction.

        Args:
            transaction_id: Transaction ID returned by write_batch

        Returns:
            Journal entry set or None if the transaction is unknown
        """
        posted = self.transactions.get(transaction_id)
        if posted is None:
            return None
        return posted.journal_entries

    def trial_balance(self) -> dict[str, tuple[Decimal, Decimal]]:
        """Sum debits and credits per account across all written entries.

        Returns:
            Dict mapping account ID to (total debits, total credits)
        """
        debits = defaultdict(lambda: Decimal("0"))
        credits = defaultdict(lambda: Decimal("0"))
        for posted in self.transactions.values():
            for entry in posted.journal_entries:
                debits[entry.account_id] += entry.debit_amount
                credits[entry.account_id] += entry.credit_amount

        return {
            account_id: (debits[account_id], credits[account_id])
            for account_id in sorted(set(debits) | set(credits), key=str)
        }
