"""Double-entry journal entry generation."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional

from ledgerpost.config.logging import get_logger
from ledgerpost.domain.classification import default_type_for, infer_transaction_type
from ledgerpost.domain.entities import (
    AccountIds,
    JournalEntryInput,
    JournalEntrySet,
    JournalEntryTransaction,
    TransactionType,
)
from ledgerpost.domain.errors import (
    ConfigurationError,
    UnbalancedEntriesError,
    UnresolvedAccountError,
    missing_cash_account,
    missing_income_account,
    unbalanced_entries,
)

logger = get_logger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Share of a loan payment booked as interest when no breakdown is known.
ESTIMATED_INTEREST_RATIO = Decimal("0.2")


def first_available(*account_ids: Optional[str]) -> Optional[str]:
    """Return the first configured account ID, or None if none is set."""
    for account_id in account_ids:
        if account_id:
            return account_id
    return None


def to_decimal(value) -> Optional[Decimal]:
    """Coerce an amount to Decimal, keeping None as None."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def debit(account_id: Optional[str], amount: Decimal, description: str) -> JournalEntryInput:
    return JournalEntryInput(
        account_id=account_id, debit_amount=amount, credit_amount=ZERO, description=description
    )


def credit(account_id: Optional[str], amount: Decimal, description: str) -> JournalEntryInput:
    return JournalEntryInput(
        account_id=account_id, debit_amount=ZERO, credit_amount=amount, description=description
    )


class JournalEntryFactory:
    """Build balanced journal entries for bank transactions.

    The factory is configured once per business with an ``AccountIds``
    mapping and is immutable afterwards, so one instance can serve any
    number of concurrent callers.

    In lenient mode (the default) a line whose account role is not
    configured is emitted with ``account_id=None`` and a warning is logged.
    In strict mode the same situation raises ``UnresolvedAccountError``.
    """

    def __init__(self, accounts: AccountIds, strict: bool = False):
        """Initialize the factory.

        Args:
            accounts: Account role configuration
            strict: Raise instead of emitting lines with unresolved accounts

        Raises:
            ConfigurationError: If the cash account or every income account is missing
        """
        if not accounts.cash_account_id:
            raise ConfigurationError(missing_cash_account())

        if not first_available(
            accounts.sales_revenue_id, accounts.service_revenue_id, accounts.other_income_id
        ):
            raise ConfigurationError(missing_income_account())

        if not accounts.misc_expense_id:
            logger.warning(
                "misc_expense_account_missing",
                detail="expense entries without a category will have no account",
            )

        self.accounts = accounts
        self.strict = strict
        self._builders: dict[
            TransactionType, Callable[[JournalEntryTransaction], list[JournalEntryInput]]
        ] = {
            TransactionType.INCOME: self._income_entries,
            TransactionType.EXPENSE: self._expense_entries,
            TransactionType.ASSET_PURCHASE: self._asset_purchase_entries,
            TransactionType.INVENTORY_PURCHASE: self._inventory_purchase_entries,
            TransactionType.LOAN_PAYMENT: self._loan_payment_entries,
            TransactionType.CREDIT_CARD_PAYMENT: self._credit_card_payment_entries,
            TransactionType.TAX_PAYMENT: self._tax_payment_entries,
            TransactionType.TAX_COLLECTION: self._income_entries,
            TransactionType.CUSTOMER_PAYMENT: self._customer_payment_entries,
            TransactionType.VENDOR_PAYMENT: self._vendor_payment_entries,
            TransactionType.PAYROLL: self._payroll_entries,
            TransactionType.TRANSFER: self._transfer_entries,
        }

    def resolve_type(self, transaction: JournalEntryTransaction) -> TransactionType:
        """Determine the effective transaction type.

        An explicit type wins over inference. An explicit value that is not
        a known type falls back to income or expense by polarity.
        """
        explicit = transaction.transaction_type
        if not explicit:
            return infer_transaction_type(transaction.description, transaction.polarity)

        try:
            return TransactionType(explicit)
        except ValueError:
            logger.debug("unknown_transaction_type", transaction_type=str(explicit))
            return default_type_for(transaction.polarity)

    def create_journal_entries(self, transaction: JournalEntryTransaction) -> JournalEntrySet:
        """Create journal entries for a transaction.

        Args:
            transaction: Transaction input

        Returns:
            Journal entry set whose debits equal its credits

        Raises:
            UnresolvedAccountError: In strict mode, if a needed account is not configured
            UnbalancedEntriesError: In strict mode, if an explicit loan breakdown
                does not add up to the amount
        """
        transaction_type = self.resolve_type(transaction)
        build = self._builders[transaction_type]
        return JournalEntrySet(entries=tuple(build(transaction)))

    def _account(
        self, role: str, transaction_type: TransactionType, *candidates: Optional[str]
    ) -> Optional[str]:
        account_id = first_available(*candidates)
        if account_id is None:
            if self.strict:
                raise UnresolvedAccountError(role, transaction_type.value)
            logger.warning(
                "unresolved_account", role=role, transaction_type=transaction_type.value
            )
        return account_id

    def _cash_out(
        self,
        debit_role: str,
        transaction_type: TransactionType,
        transaction: JournalEntryTransaction,
        debit_candidates: tuple[Optional[str], ...],
        debit_description: str,
        credit_description: str,
    ) -> list[JournalEntryInput]:
        # Shape shared by every payment: debit one account, credit cash.
        amount = to_decimal(transaction.amount)
        account_id = self._account(debit_role, transaction_type, *debit_candidates)
        return [
            debit(account_id, amount, debit_description),
            credit(self.accounts.cash_account_id, amount, credit_description),
        ]

    def _income_entries(self, transaction: JournalEntryTransaction) -> list[JournalEntryInput]:
        amount = to_decimal(transaction.amount)
        tax_amount = to_decimal(transaction.tax_amount)
        desc = transaction.description

        revenue_account_id = first_available(
            transaction.category_id,
            self.accounts.sales_revenue_id,
            self.accounts.service_revenue_id,
            self.accounts.other_income_id,
        )

        tax_account_id = None
        if tax_amount:
            tax_account_id = self._tax_collected_account()

        net_amount = amount - tax_amount if tax_account_id else amount

        entries = [
            debit(self.accounts.cash_account_id, amount, f"Cash received: {desc}"),
            credit(revenue_account_id, net_amount, f"Revenue: {desc}"),
        ]
        if tax_account_id:
            entries.append(credit(tax_account_id, tax_amount, f"Sales tax collected: {desc}"))
        return entries

    def _tax_collected_account(self) -> Optional[str]:
        account_id = self.accounts.sales_tax_payable_id
        if account_id:
            return account_id
        if self.strict:
            raise UnresolvedAccountError("sales_tax_payable", TransactionType.INCOME.value)
        # Tax stays in revenue so the entry still balances.
        logger.warning("sales_tax_account_missing", detail="tax amount booked as revenue")
        return None

    def _expense_entries(self, transaction: JournalEntryTransaction) -> list[JournalEntryInput]:
        desc = transaction.description
        return self._cash_out(
            "misc_expense",
            TransactionType.EXPENSE,
            transaction,
            (transaction.category_id, self.accounts.misc_expense_id),
            f"Expense: {desc}",
            f"Cash payment: {desc}",
        )

    def _asset_purchase_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        desc = transaction.description
        return self._cash_out(
            "fixed_assets",
            TransactionType.ASSET_PURCHASE,
            transaction,
            (transaction.category_id, self.accounts.fixed_assets_id),
            f"Asset purchase: {desc}",
            f"Payment for asset: {desc}",
        )

    def _inventory_purchase_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        desc = transaction.description
        return self._cash_out(
            "inventory",
            TransactionType.INVENTORY_PURCHASE,
            transaction,
            (self.accounts.inventory_id,),
            f"Inventory purchase: {desc}",
            f"Payment for inventory: {desc}",
        )

    def _loan_payment_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        amount = to_decimal(transaction.amount)
        principal = to_decimal(transaction.principal_amount)
        interest = to_decimal(transaction.interest_amount)
        desc = transaction.description

        if principal and interest:
            marker = ""
            if principal + interest != amount:
                if self.strict:
                    raise UnbalancedEntriesError(unbalanced_entries(principal + interest, amount))
                logger.warning(
                    "loan_breakdown_mismatch",
                    amount=str(amount),
                    principal=str(principal),
                    interest=str(interest),
                )
        else:
            # TODO: replace the fixed split with the loan's amortization schedule
            # once loan terms are available on the transaction.
            interest = (amount * ESTIMATED_INTEREST_RATIO).quantize(CENT, rounding=ROUND_HALF_UP)
            principal = amount - interest
            marker = " (estimated)"

        loan_type = TransactionType.LOAN_PAYMENT
        return [
            debit(
                self._account("loans_payable", loan_type, self.accounts.loans_payable_id),
                principal,
                f"Loan principal payment{marker}: {desc}",
            ),
            debit(
                self._account("interest_expense", loan_type, self.accounts.interest_expense_id),
                interest,
                f"Loan interest{marker}: {desc}",
            ),
            credit(self.accounts.cash_account_id, amount, f"Loan payment: {desc}"),
        ]

    def _credit_card_payment_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        desc = transaction.description
        return self._cash_out(
            "credit_cards_payable",
            TransactionType.CREDIT_CARD_PAYMENT,
            transaction,
            (self.accounts.credit_cards_payable_id,),
            f"Credit card payment: {desc}",
            f"Payment to credit card: {desc}",
        )

    def _tax_payment_entries(self, transaction: JournalEntryTransaction) -> list[JournalEntryInput]:
        desc = transaction.description
        if "payroll" in desc.lower():
            role, account_id = "payroll_tax_payable", self.accounts.payroll_tax_payable_id
        else:
            role, account_id = "sales_tax_payable", self.accounts.sales_tax_payable_id
        return self._cash_out(
            role,
            TransactionType.TAX_PAYMENT,
            transaction,
            (account_id,),
            f"Tax payment: {desc}",
            f"Payment to tax authority: {desc}",
        )

    def _customer_payment_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        amount = to_decimal(transaction.amount)
        desc = transaction.description
        receivable_id = self._account(
            "accounts_receivable",
            TransactionType.CUSTOMER_PAYMENT,
            self.accounts.accounts_receivable_id,
        )
        return [
            debit(self.accounts.cash_account_id, amount, f"Payment received: {desc}"),
            credit(receivable_id, amount, f"Customer payment: {desc}"),
        ]

    def _vendor_payment_entries(
        self, transaction: JournalEntryTransaction
    ) -> list[JournalEntryInput]:
        desc = transaction.description
        return self._cash_out(
            "accounts_payable",
            TransactionType.VENDOR_PAYMENT,
            transaction,
            (self.accounts.accounts_payable_id,),
            f"Vendor payment: {desc}",
            f"Payment to vendor: {desc}",
        )

    def _payroll_entries(self, transaction: JournalEntryTransaction) -> list[JournalEntryInput]:
        # Gross pay only; withholdings are not split out.
        desc = transaction.description
        return self._cash_out(
            "salaries_wages",
            TransactionType.PAYROLL,
            transaction,
            (self.accounts.salaries_wages_id,),
            f"Payroll: {desc}",
            f"Payroll payment: {desc}",
        )

    def _transfer_entries(self, transaction: JournalEntryTransaction) -> list[JournalEntryInput]:
        # Transfers show up on both bank feeds; booking them would double count.
        return []
