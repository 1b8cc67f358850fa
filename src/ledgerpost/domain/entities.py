"""Domain model entities for ledgerpost.

These are pure data classes representing bookkeeping concepts, independent of
any storage schema. The journal entry factory consumes them and produces
journal entry sets that a caller persists.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Semantic kind of a bank transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    ASSET_PURCHASE = "asset_purchase"
    INVENTORY_PURCHASE = "inventory_purchase"
    LOAN_PAYMENT = "loan_payment"
    CREDIT_CARD_PAYMENT = "credit_card_payment"
    TAX_PAYMENT = "tax_payment"
    TAX_COLLECTION = "tax_collection"
    CUSTOMER_PAYMENT = "customer_payment"
    VENDOR_PAYMENT = "vendor_payment"
    PAYROLL = "payroll"
    TRANSFER = "transfer"


class Polarity(str, Enum):
    """Bank-statement direction of a transaction."""

    CREDIT = "credit"
    DEBIT = "debit"


class TransactionKind(str, Enum):
    """Import-level classification of a bank row."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


@dataclass(frozen=True)
class AccountIds:
    """Mapping of semantic account roles to chart-of-accounts account IDs."""

    cash_account_id: str

    # Assets
    accounts_receivable_id: Optional[str] = None
    inventory_id: Optional[str] = None
    prepaid_expenses_id: Optional[str] = None
    fixed_assets_id: Optional[str] = None

    # Liabilities
    accounts_payable_id: Optional[str] = None
    credit_cards_payable_id: Optional[str] = None
    sales_tax_payable_id: Optional[str] = None
    payroll_tax_payable_id: Optional[str] = None
    loans_payable_id: Optional[str] = None

    # Income
    sales_revenue_id: Optional[str] = None
    service_revenue_id: Optional[str] = None
    other_income_id: Optional[str] = None

    # Expenses
    cost_of_goods_sold_id: Optional[str] = None
    salaries_wages_id: Optional[str] = None
    rent_expense_id: Optional[str] = None
    utilities_expense_id: Optional[str] = None
    interest_expense_id: Optional[str] = None
    misc_expense_id: Optional[str] = None

    @classmethod
    def role_names(cls) -> list[str]:
        """Return role names (field names without the ``_id`` suffix)."""
        names = []
        for f in fields(cls):
            name = f.name[: -len("_id")]
            if name == "cash_account":
                name = "cash"
            names.append(name)
        return names

    @staticmethod
    def field_for_role(role: str) -> str:
        """Return the dataclass field name for a role name."""
        return "cash_account_id" if role == "cash" else f"{role}_id"


@dataclass(frozen=True)
class JournalEntryTransaction:
    """Transaction input for journal entry generation.

    ``amount`` is the absolute transaction value; ``polarity`` carries the
    bank-statement direction.
    """

    description: str
    amount: Decimal
    polarity: Polarity
    transaction_type: Optional[TransactionType | str] = None
    category_id: Optional[str] = None
    tax_amount: Optional[Decimal] = None
    principal_amount: Optional[Decimal] = None
    interest_amount: Optional[Decimal] = None


@dataclass(frozen=True)
class JournalEntryInput:
    """A single debit or credit line of a journal entry."""

    account_id: Optional[str]
    debit_amount: Decimal
    credit_amount: Decimal
    description: str


@dataclass(frozen=True)
class JournalEntrySet:
    """Ordered journal lines produced for one transaction."""

    entries: tuple[JournalEntryInput, ...] = ()

    @property
    def total_debits(self) -> Decimal:
        return sum((e.debit_amount for e in self.entries), Decimal("0"))

    @property
    def total_credits(self) -> Decimal:
        return sum((e.credit_amount for e in self.entries), Decimal("0"))

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ChartAccount:
    """Chart of accounts entry belonging to a business."""

    id: str
    code: str
    name: str
    account_type: str
    description: str = ""


@dataclass(frozen=True)
class BankTransaction:
    """Bank transaction row awaiting import into the ledger."""

    date: date
    description: str
    amount: Decimal
    kind: TransactionKind
    transaction_type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    tax_amount: Optional[Decimal] = None
    principal_amount: Optional[Decimal] = None
    interest_amount: Optional[Decimal] = None
    external_id: Optional[str] = None
    vendor: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class PostedTransaction:
    """Bank transaction paired with the journal entries to persist for it."""

    transaction: BankTransaction
    journal_entries: JournalEntrySet = field(default_factory=JournalEntrySet)
