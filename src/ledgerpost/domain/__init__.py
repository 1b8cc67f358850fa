"""Domain layer for ledgerpost."""

from ledgerpost.domain.entities import (
    AccountIds,
    BankTransaction,
    JournalEntryInput,
    JournalEntrySet,
    JournalEntryTransaction,
    Polarity,
    TransactionKind,
    TransactionType,
)
from ledgerpost.domain.journal import JournalEntryFactory
from ledgerpost.domain.ledger import InMemoryLedger, LedgerWriter
from ledgerpost.domain.processor import ProcessorConfig, TransactionProcessor

__all__ = [
    "AccountIds",
    "BankTransaction",
    "JournalEntryInput",
    "JournalEntrySet",
    "JournalEntryTransaction",
    "Polarity",
    "TransactionKind",
    "TransactionType",
    "JournalEntryFactory",
    "InMemoryLedger",
    "LedgerWriter",
    "ProcessorConfig",
    "TransactionProcessor",
]
