"""Default chart of accounts and account role mapping."""

from dataclasses import dataclass
from typing import Iterable, Optional

from ledgerpost.domain.entities import AccountIds, ChartAccount
from ledgerpost.domain.errors import ConfigurationError


@dataclass(frozen=True)
class AccountTemplate:
    """Chart of accounts entry created for every new business."""

    code: str
    name: str
    account_type: str
    description: str


CHART_OF_ACCOUNTS: tuple[AccountTemplate, ...] = (
    # Assets
    AccountTemplate("1000", "Cash", "ASSET", "Funds held in checking or savings accounts."),
    AccountTemplate("1010", "Petty Cash", "ASSET", "Small cash on hand for minor expenses."),
    AccountTemplate("1100", "Accounts Receivable", "ASSET", "Amounts owed to the business by customers."),
    AccountTemplate("1200", "Inventory", "ASSET", "Value of goods held for sale."),
    AccountTemplate("1300", "Prepaid Expenses", "ASSET", "Payments made in advance for services."),
    AccountTemplate("1400", "Fixed Assets", "ASSET", "Long-term tangible assets like equipment and furniture."),
    AccountTemplate("1410", "Accumulated Depreciation", "ASSET", "Contra-asset tracking depreciation of fixed assets."),
    AccountTemplate("1500", "Other Assets", "ASSET", "Other long-term assets."),
    # Liabilities
    AccountTemplate("2000", "Accounts Payable", "LIABILITY", "Amounts owed to suppliers and vendors."),
    AccountTemplate("2100", "Credit Cards Payable", "LIABILITY", "Balances owed on business credit cards."),
    AccountTemplate("2200", "Payroll Liabilities", "LIABILITY", "Taxes and withholdings owed for employee compensation."),
    AccountTemplate("2300", "Sales Tax Payable", "LIABILITY", "Sales tax collected and owed to the government."),
    AccountTemplate("2400", "Loans Payable", "LIABILITY", "Outstanding loan balances."),
    AccountTemplate("2500", "Other Current Liabilities", "LIABILITY", "Miscellaneous short-term liabilities."),
    AccountTemplate("2600", "Long-Term Liabilities", "LIABILITY", "Debts due beyond one year."),
    # Equity
    AccountTemplate("3000", "Owner's Equity", "EQUITY", "Owner's investment in the business."),
    AccountTemplate("3050", "Opening Balance Equity", "EQUITY", "Offset for bank opening balances."),
    AccountTemplate("3100", "Retained Earnings", "EQUITY", "Accumulated profits or losses."),
    AccountTemplate("3200", "Drawings/Distributions", "EQUITY", "Withdrawals made by the owner."),
    AccountTemplate("3300", "Common Stock", "EQUITY", "Capital invested by shareholders."),
    AccountTemplate("3400", "Additional Paid-in Capital", "EQUITY", "Funds received above par value."),
    # Income
    AccountTemplate("4000", "Sales Revenue", "INCOME", "Income from sale of products or services."),
    AccountTemplate("4100", "Other Revenue", "INCOME", "Non-operating income such as interest."),
    # Cost of sales
    AccountTemplate("5000", "Cost of Goods Sold (COGS)", "EXPENSE", "Direct costs of goods or services sold."),
    # Operating expenses
    AccountTemplate("6000", "Salaries and Wages", "EXPENSE", "Employee compensation expenses."),
    AccountTemplate("6100", "Rent Expense", "EXPENSE", "Office, store or warehouse rental."),
    AccountTemplate("6200", "Utilities Expense", "EXPENSE", "Electricity, water, gas, internet, etc."),
    AccountTemplate("6300", "Office Supplies", "EXPENSE", "Consumables used in daily operations."),
    AccountTemplate("6400", "Advertising & Marketing", "EXPENSE", "Promotion and marketing expenses."),
    AccountTemplate("6500", "Travel & Meals", "EXPENSE", "Business travel, lodging, and meals."),
    AccountTemplate("6600", "Professional Fees", "EXPENSE", "Legal, consulting, and accounting services."),
    AccountTemplate("6700", "Insurance Expense", "EXPENSE", "Premiums for business insurance policies."),
    AccountTemplate("6800", "Depreciation Expense", "EXPENSE", "Depreciation of fixed assets over time."),
    AccountTemplate("6850", "Interest Expense", "EXPENSE", "Interest paid on loans and credit lines."),
    AccountTemplate("6900", "Miscellaneous Expense", "EXPENSE", "Expenses not categorized elsewhere."),
    # Tax
    AccountTemplate("7000", "Tax Expense", "EXPENSE", "Tax expense"),
)

ACCOUNT_CODES = {
    "CASH": "1000",
    "PETTY_CASH": "1010",
    "ACCOUNTS_RECEIVABLE": "1100",
    "INVENTORY": "1200",
    "PREPAID_EXPENSES": "1300",
    "FIXED_ASSETS": "1400",
    "ACCUMULATED_DEPRECIATION": "1410",
    "OTHER_ASSETS": "1500",
    "ACCOUNTS_PAYABLE": "2000",
    "CREDIT_CARDS_PAYABLE": "2100",
    "PAYROLL_LIABILITIES": "2200",
    "SALES_TAX_PAYABLE": "2300",
    "LOANS_PAYABLE": "2400",
    "OTHER_CURRENT_LIABILITIES": "2500",
    "LONG_TERM_LIABILITIES": "2600",
    "OWNERS_EQUITY": "3000",
    "OPENING_BALANCE_EQUITY": "3050",
    "RETAINED_EARNINGS": "3100",
    "DRAWINGS_DISTRIBUTIONS": "3200",
    "COMMON_STOCK": "3300",
    "ADDITIONAL_PAID_IN_CAPITAL": "3400",
    "SALES_REVENUE": "4000",
    "OTHER_REVENUE": "4100",
    "COST_OF_GOODS_SOLD": "5000",
    "SALARIES_WAGES": "6000",
    "RENT_EXPENSE": "6100",
    "UTILITIES_EXPENSE": "6200",
    "OFFICE_SUPPLIES": "6300",
    "ADVERTISING_MARKETING": "6400",
    "TRAVEL_MEALS": "6500",
    "PROFESSIONAL_FEES": "6600",
    "INSURANCE_EXPENSE": "6700",
    "DEPRECIATION_EXPENSE": "6800",
    "INTEREST_EXPENSE": "6850",
    "MISCELLANEOUS_EXPENSE": "6900",
    "TAX_EXPENSE": "7000",
}

# Inclusive numeric code ranges per statement grouping
ACCOUNT_RANGES = {
    "ASSETS": (1000, 1999),
    "LIABILITIES": (2000, 2999),
    "EQUITY": (3000, 3999),
    "INCOME": (4000, 4999),
    "COST_OF_SALES": (5000, 5999),
    "OPERATING_EXPENSES": (6000, 6999),
    "TAX_EXPENSES": (7000, 7999),
}

# Account code that fills each role of AccountIds
ROLE_ACCOUNT_CODES = {
    "cash": ACCOUNT_CODES["CASH"],
    "accounts_receivable": ACCOUNT_CODES["ACCOUNTS_RECEIVABLE"],
    "inventory": ACCOUNT_CODES["INVENTORY"],
    "prepaid_expenses": ACCOUNT_CODES["PREPAID_EXPENSES"],
    "fixed_assets": ACCOUNT_CODES["FIXED_ASSETS"],
    "accounts_payable": ACCOUNT_CODES["ACCOUNTS_PAYABLE"],
    "credit_cards_payable": ACCOUNT_CODES["CREDIT_CARDS_PAYABLE"],
    "payroll_tax_payable": ACCOUNT_CODES["PAYROLL_LIABILITIES"],
    "sales_tax_payable": ACCOUNT_CODES["SALES_TAX_PAYABLE"],
    "loans_payable": ACCOUNT_CODES["LOANS_PAYABLE"],
    "sales_revenue": ACCOUNT_CODES["SALES_REVENUE"],
    "other_income": ACCOUNT_CODES["OTHER_REVENUE"],
    "cost_of_goods_sold": ACCOUNT_CODES["COST_OF_GOODS_SOLD"],
    "salaries_wages": ACCOUNT_CODES["SALARIES_WAGES"],
    "rent_expense": ACCOUNT_CODES["RENT_EXPENSE"],
    "utilities_expense": ACCOUNT_CODES["UTILITIES_EXPENSE"],
    "interest_expense": ACCOUNT_CODES["INTEREST_EXPENSE"],
    "misc_expense": ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"],
}


def get_account_by_code(code: str) -> Optional[AccountTemplate]:
    """Get a default chart entry by its code.

    Args:
        code: Account code (e.g. "1000")

    Returns:
        Account template or None if the code is not in the default chart
    """
    for account in CHART_OF_ACCOUNTS:
        if account.code == code:
            return account
    return None


def is_account_in_range(code: str, range_key: str) -> bool:
    """Check whether an account code falls in a statement grouping.

    Args:
        code: Account code
        range_key: Key of ACCOUNT_RANGES (e.g. "OPERATING_EXPENSES")

    Returns:
        True if the code is numeric and inside the range
    """
    try:
        numeric_code = int(code)
    except (TypeError, ValueError):
        return False

    low, high = ACCOUNT_RANGES[range_key]
    return low <= numeric_code <= high


def default_chart() -> list[ChartAccount]:
    """Return the default chart as accounts whose IDs equal their codes."""
    return [
        ChartAccount(
            id=template.code,
            code=template.code,
            name=template.name,
            account_type=template.account_type,
            description=template.description,
        )
        for template in CHART_OF_ACCOUNTS
    ]


def build_account_ids(
    accounts: Iterable[ChartAccount], cash_account_id: Optional[str] = None
) -> AccountIds:
    """Map a business's chart of accounts onto journal entry roles.

    Args:
        accounts: The business's chart of accounts
        cash_account_id: Ledger account linked to the bank account being
            imported; overrides the generic cash account

    Returns:
        Account role configuration

    Raises:
        ConfigurationError: If no cash account can be found
    """
    accounts = list(accounts)
    by_code = {account.code: account.id for account in accounts}

    role_ids = {}
    for role, code in ROLE_ACCOUNT_CODES.items():
        if code in by_code:
            role_ids[AccountIds.field_for_role(role)] = by_code[code]

    if cash_account_id:
        role_ids["cash_account_id"] = cash_account_id

    if "misc_expense_id" not in role_ids:
        for account in accounts:
            if account.account_type == "EXPENSE" and is_account_in_range(
                account.code, "OPERATING_EXPENSES"
            ):
                role_ids["misc_expense_id"] = account.id
                break

    if "cash_account_id" not in role_ids:
        raise ConfigurationError(
            f"Cash account ({ACCOUNT_CODES['CASH']}) is required but not found in Chart of Accounts"
        )

    return AccountIds(**role_ids)
