"""Reading bank statement CSV files into bank transactions."""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from ledgerpost.config.logging import get_logger
from ledgerpost.domain.category_mapping import (
    BankCategory,
    get_transaction_kind,
    get_transaction_type_from_category,
    map_category_with_merchant,
    should_ignore_transaction,
)
from ledgerpost.domain.entities import BankTransaction, TransactionKind, TransactionType
from ledgerpost.utils.amount_parser import parse_amount, parse_optional_amount
from ledgerpost.utils.date_parser import parse_date

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount")

KIND_ALIASES = {
    "income": TransactionKind.INCOME,
    "credit": TransactionKind.INCOME,
    "expense": TransactionKind.EXPENSE,
    "debit": TransactionKind.EXPENSE,
    "transfer": TransactionKind.TRANSFER,
}


@dataclass
class CSVReadResult:
    """Bank transactions read from a CSV file."""

    transactions: list[BankTransaction] = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


def normalize_column(name: str) -> str:
    """Normalize a CSV header ("Tax Amount" -> "tax_amount")."""
    return "_".join(name.strip().lower().split())


def read_bank_transactions(
    csv_file_path: str | Path,
    category_accounts: Optional[Mapping[str, str]] = None,
    dayfirst: bool = False,
) -> CSVReadResult:
    """Read bank transactions from a CSV file.

    Required columns are date, description and amount. Optional columns:
    type, transaction_type, category, tax_amount, principal_amount,
    interest_amount, external_id, vendor, reference, category_primary and
    category_detailed.

    The transaction kind comes from the type column, else from the bank
    category, else from the amount sign. A bank category also sets the
    transaction type and, through ``category_accounts``, the category
    account when those columns are empty. Account-to-account transfers
    flagged by the bank category are skipped.

    Args:
        csv_file_path: Path to CSV file
        category_accounts: Chart-of-accounts category name to account ID
        dayfirst: Read ambiguous numeric dates as day/month

    Returns:
        CSVReadResult with transactions, skip count and row errors

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If the file has no header or lacks required columns
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    result = CSVReadResult()

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
        except csv.Error:
            delimiter = ","

        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None:
            raise ValueError("CSV file has no columns")

        columns = {normalize_column(name): name for name in reader.fieldnames}
        missing_columns = [col for col in REQUIRED_COLUMNS if col not in columns]
        if missing_columns:
            raise ValueError(f"CSV file missing required columns: {', '.join(missing_columns)}")

        # Header is row 1
        for row_num, row in enumerate(reader, start=2):
            values = {
                key: (row.get(original) or "").strip() or None
                for key, original in columns.items()
            }
            try:
                transaction = _parse_row(values, category_accounts, dayfirst)
            except ValueError as e:
                result.errors.append(f"Row {row_num}: {e}")
                continue

            if transaction is None:
                result.skipped += 1
                continue
            result.transactions.append(transaction)

    logger.info(
        "bank_csv_read",
        path=str(csv_path),
        transactions=len(result.transactions),
        skipped=result.skipped,
        errors=len(result.errors),
    )
    return result


def _parse_row(
    values: dict[str, Optional[str]],
    category_accounts: Optional[Mapping[str, str]],
    dayfirst: bool,
) -> Optional[BankTransaction]:
    for column in REQUIRED_COLUMNS:
        if not values.get(column):
            raise ValueError(f"Missing {column}")

    txn_date = parse_date(values["date"], dayfirst=dayfirst)
    amount = parse_amount(values["amount"])
    description = values["description"]
    vendor = values.get("vendor")

    bank_category = None
    if values.get("category_primary"):
        bank_category = BankCategory(
            primary=values["category_primary"].upper(),
            detailed=(values.get("category_detailed") or "").upper(),
        )
        if should_ignore_transaction(bank_category):
            return None

    type_value = values.get("type")
    if type_value:
        kind = KIND_ALIASES.get(type_value.lower())
        if kind is None:
            raise ValueError(f"Unknown type '{type_value}'")
    elif bank_category is not None:
        kind = get_transaction_kind(bank_category)
    else:
        kind = TransactionKind.EXPENSE if amount < 0 else TransactionKind.INCOME

    transaction_type = None
    if values.get("transaction_type"):
        try:
            transaction_type = TransactionType(values["transaction_type"].lower())
        except ValueError:
            raise ValueError(f"Unknown transaction type '{values['transaction_type']}'")
    elif bank_category is not None:
        transaction_type = get_transaction_type_from_category(bank_category, description)

    # Mapped categories are income or expense accounts; other types keep
    # their own balance sheet accounts.
    category_id = values.get("category")
    if (
        category_id is None
        and bank_category is not None
        and category_accounts
        and transaction_type in (TransactionType.INCOME, TransactionType.EXPENSE)
    ):
        category_id = category_accounts.get(map_category_with_merchant(bank_category, vendor))

    return BankTransaction(
        date=txn_date,
        description=description,
        amount=abs(amount),
        kind=kind,
        transaction_type=transaction_type,
        category_id=category_id,
        tax_amount=parse_optional_amount(values.get("tax_amount")),
        principal_amount=parse_optional_amount(values.get("principal_amount")),
        interest_amount=parse_optional_amount(values.get("interest_amount")),
        external_id=values.get("external_id"),
        vendor=vendor,
        reference=values.get("reference"),
    )
