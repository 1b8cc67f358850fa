"""Transaction type inference from bank descriptions."""

from ledgerpost.domain.entities import Polarity, TransactionType


# Ordered rules; the first rule with a matching keyword wins.
INFERENCE_RULES: tuple[tuple[tuple[str, ...], TransactionType], ...] = (
    (("equipment", "computer", "furniture"), TransactionType.ASSET_PURCHASE),
    (("inventory", "merchandise", "products"), TransactionType.INVENTORY_PURCHASE),
    (("loan payment", "loan pmt"), TransactionType.LOAN_PAYMENT),
    (("credit card payment", "cc payment"), TransactionType.CREDIT_CARD_PAYMENT),
    (("tax payment", "sales tax", "payroll tax"), TransactionType.TAX_PAYMENT),
    (("payroll", "salary", "wages"), TransactionType.PAYROLL),
    (("transfer", "tfr"), TransactionType.TRANSFER),
)


def default_type_for(polarity: Polarity | str) -> TransactionType:
    """Return the fallback type for a bank-statement direction.

    Args:
        polarity: "credit" or "debit"

    Returns:
        INCOME for credits, EXPENSE for debits

    Raises:
        ValueError: If polarity is neither "credit" nor "debit"
    """
    if Polarity(polarity) is Polarity.CREDIT:
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def infer_transaction_type(description: str, polarity: Polarity | str) -> TransactionType:
    """Infer a transaction type from its description.

    Matching is a case-insensitive substring test against the keywords of
    each rule in ``INFERENCE_RULES``.

    Args:
        description: Bank transaction description
        polarity: Bank-statement direction, used when no rule matches

    Returns:
        Inferred transaction type
    """
    desc = (description or "").lower()
    for keywords, transaction_type in INFERENCE_RULES:
        if any(keyword in desc for keyword in keywords):
            return transaction_type
    return default_type_for(polarity)
