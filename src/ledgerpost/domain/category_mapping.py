"""Map bank aggregator categories onto chart-of-accounts categories.

Bank feeds tag every transaction with a personal finance category made of a
primary group (``FOOD_AND_DRINK``) and a detailed code
(``FOOD_AND_DRINK_RESTAURANT``). The tables below translate those tags into
the category names used by the bookkeeping chart of accounts.
"""

from dataclasses import dataclass
from typing import Optional

from ledgerpost.domain.chart_of_accounts import ACCOUNT_CODES
from ledgerpost.domain.entities import TransactionKind, TransactionType

DEFAULT_CATEGORY = "Miscellaneous"

DETAILED_CATEGORY_MAP = {
    # Income
    "INCOME_WAGES": "Service Revenue",
    "INCOME_INTEREST_EARNED": "Interest Income",
    "INCOME_DIVIDENDS": "Other Income",
    "INCOME_RETIREMENT_PENSION": "Other Income",
    "INCOME_TAX_REFUND": "Other Income",
    "INCOME_UNEMPLOYMENT": "Other Income",
    "INCOME_OTHER_INCOME": "Other Income",
    # Bank fees
    "BANK_FEES_ATM_FEES": "Bank Charges",
    "BANK_FEES_FOREIGN_TRANSACTION_FEES": "Bank Charges",
    "BANK_FEES_INSUFFICIENT_FUNDS": "Bank Charges",
    "BANK_FEES_INTEREST_CHARGE": "Interest Expense",
    "BANK_FEES_OVERDRAFT_FEES": "Bank Charges",
    "BANK_FEES_OTHER_BANK_FEES": "Bank Charges",
    # Entertainment
    "ENTERTAINMENT_CASINOS_AND_GAMBLING": "Meals & Entertainment",
    "ENTERTAINMENT_MUSIC_AND_AUDIO": "Meals & Entertainment",
    "ENTERTAINMENT_SPORTING_EVENTS_AMUSEMENT_PARKS_AND_MUSEUMS": "Meals & Entertainment",
    "ENTERTAINMENT_TV_AND_MOVIES": "Meals & Entertainment",
    "ENTERTAINMENT_VIDEO_GAMES": "Meals & Entertainment",
    "ENTERTAINMENT_OTHER_ENTERTAINMENT": "Meals & Entertainment",
    # Food and drink
    "FOOD_AND_DRINK_RESTAURANT": "Meals & Entertainment",
    "FOOD_AND_DRINK_FAST_FOOD": "Meals & Entertainment",
    "FOOD_AND_DRINK_COFFEE": "Meals & Entertainment",
    "FOOD_AND_DRINK_TAKEOUT": "Meals & Entertainment",
    "FOOD_AND_DRINK_ALCOHOL_AND_BARS": "Meals & Entertainment",
    "FOOD_AND_DRINK_GROCERIES": "Miscellaneous",
    # General merchandise
    "GENERAL_MERCHANDISE_BOOKSTORES_AND_NEWSSTANDS": "Office Supplies",
    "GENERAL_MERCHANDISE_CLOTHING_AND_ACCESSORIES": "Miscellaneous",
    "GENERAL_MERCHANDISE_CONVENIENCE_STORES": "Office Supplies",
    "GENERAL_MERCHANDISE_DEPARTMENT_STORES": "Office Supplies",
    "GENERAL_MERCHANDISE_ELECTRONICS": "Office Supplies",
    "GENERAL_MERCHANDISE_GIFTS_AND_NOVELTIES": "Miscellaneous",
    "GENERAL_MERCHANDISE_OFFICE_SUPPLIES": "Office Supplies",
    "GENERAL_MERCHANDISE_ONLINE_MARKETPLACES": "Office Supplies",
    "GENERAL_MERCHANDISE_SPORTING_GOODS": "Miscellaneous",
    # Home improvement
    "HOME_IMPROVEMENT_FURNITURE": "Office Supplies",
    "HOME_IMPROVEMENT_HARDWARE": "Office Supplies",
    "HOME_IMPROVEMENT_REPAIR_AND_MAINTENANCE": "Miscellaneous",
    # Loan payments
    "LOAN_PAYMENTS_CAR_PAYMENT": "Vehicle Maintenance",
    "LOAN_PAYMENTS_CREDIT_CARD_PAYMENT": "Credit Card Fees",
    "LOAN_PAYMENTS_PERSONAL_LOAN_PAYMENT": "Interest Expense",
    "LOAN_PAYMENTS_MORTGAGE_PAYMENT": "Rent",
    "LOAN_PAYMENTS_STUDENT_LOAN_PAYMENT": "Miscellaneous",
    # Medical
    "MEDICAL_DENTAL_CARE": "Insurance",
    "MEDICAL_EYE_CARE": "Insurance",
    "MEDICAL_NURSING_CARE": "Insurance",
    "MEDICAL_PHARMACIES_AND_SUPPLEMENTS": "Insurance",
    "MEDICAL_PRIMARY_CARE": "Insurance",
    "MEDICAL_VETERINARY_SERVICES": "Miscellaneous",
    # Personal care
    "PERSONAL_CARE_GYMS_AND_FITNESS_CENTERS": "Miscellaneous",
    "PERSONAL_CARE_HAIR_AND_BEAUTY": "Miscellaneous",
    "PERSONAL_CARE_LAUNDRY_AND_DRY_CLEANING": "Miscellaneous",
    # General services
    "GENERAL_SERVICES_ACCOUNTING_AND_FINANCIAL_PLANNING": "Professional Fees",
    "GENERAL_SERVICES_AUTOMOTIVE": "Vehicle Maintenance",
    "GENERAL_SERVICES_CONSULTING_AND_LEGAL": "Professional Fees",
    "GENERAL_SERVICES_EDUCATION": "Professional Fees",
    "GENERAL_SERVICES_INSURANCE": "Insurance",
    "GENERAL_SERVICES_POSTAGE_AND_SHIPPING": "Office Supplies",
    "GENERAL_SERVICES_STORAGE": "Rent",
    # Rent and utilities
    "RENT_AND_UTILITIES_GAS_AND_ELECTRICITY": "Utilities",
    "RENT_AND_UTILITIES_INTERNET_AND_CABLE": "Internet",
    "RENT_AND_UTILITIES_RENT": "Rent",
    "RENT_AND_UTILITIES_SEWAGE_AND_WASTE_MANAGEMENT": "Utilities",
    "RENT_AND_UTILITIES_TELEPHONE": "Telephone",
    "RENT_AND_UTILITIES_WATER": "Utilities",
    # Travel
    "TRAVEL_FLIGHTS": "Travel",
    "TRAVEL_GAS_STATIONS": "Fuel",
    "TRAVEL_HOTELS": "Travel",
    "TRAVEL_PARKING": "Travel",
    "TRAVEL_PUBLIC_TRANSIT": "Travel",
    "TRAVEL_RENTAL_CARS": "Travel",
    "TRAVEL_TAXIS_AND_RIDE_SHARES": "Travel",
    # Transportation
    "TRANSPORTATION_BIKES_AND_SCOOTERS": "Vehicle Maintenance",
    "TRANSPORTATION_GAS_STATIONS": "Fuel",
    "TRANSPORTATION_PARKING": "Vehicle Maintenance",
    "TRANSPORTATION_PUBLIC_TRANSIT": "Travel",
    "TRANSPORTATION_TAXIS_AND_RIDE_SHARES": "Travel",
    "TRANSPORTATION_TOLLS": "Vehicle Maintenance",
}

PRIMARY_CATEGORY_MAP = {
    "INCOME": "Other Income",
    "BANK_FEES": "Bank Charges",
    "ENTERTAINMENT": "Meals & Entertainment",
    "FOOD_AND_DRINK": "Meals & Entertainment",
    "GENERAL_MERCHANDISE": "Office Supplies",
    "HOME_IMPROVEMENT": "Miscellaneous",
    "LOAN_PAYMENTS": "Interest Expense",
    "MEDICAL": "Insurance",
    "PERSONAL_CARE": "Miscellaneous",
    "GENERAL_SERVICES": "Professional Fees",
    "RENT_AND_UTILITIES": "Utilities",
    "TRAVEL": "Travel",
    "TRANSPORTATION": "Vehicle Maintenance",
}

# Checked in order; the first merchant name contained in the payee wins.
MERCHANT_OVERRIDES = {
    # Marketing
    "FACEBOOK": "Advertising & Marketing",
    "GOOGLE ADS": "Advertising & Marketing",
    "LINKEDIN": "Advertising & Marketing",
    "TWITTER": "Advertising & Marketing",
    # Software and SaaS
    "GOOGLE": "Software Subscriptions",
    "AMAZON WEB SERVICES": "Software Subscriptions",
    "MICROSOFT": "Software Subscriptions",
    "ADOBE": "Software Subscriptions",
    "SLACK": "Software Subscriptions",
    "ZOOM": "Software Subscriptions",
    "DROPBOX": "Software Subscriptions",
    "GITHUB": "Software Subscriptions",
    # Professional services
    "QUICKBOOKS": "Professional Fees",
    "H&R BLOCK": "Professional Fees",
    "LEGALZOOM": "Professional Fees",
    # Utilities and communication
    "BELL": "Telephone",
    "ROGERS": "Internet",
    "TELUS": "Telephone",
    "SHAW": "Internet",
}

IGNORED_DETAILED_CATEGORIES = frozenset(
    {"TRANSFER_IN_ACCOUNT_TRANSFER", "TRANSFER_OUT_ACCOUNT_TRANSFER"}
)

# Where each category lands on the default chart of accounts
CATEGORY_ACCOUNT_CODES = {
    "Sales Revenue": ACCOUNT_CODES["SALES_REVENUE"],
    "Service Revenue": ACCOUNT_CODES["SALES_REVENUE"],
    "Consulting Revenue": ACCOUNT_CODES["SALES_REVENUE"],
    "Interest Income": ACCOUNT_CODES["OTHER_REVENUE"],
    "Other Income": ACCOUNT_CODES["OTHER_REVENUE"],
    "Advertising & Marketing": ACCOUNT_CODES["ADVERTISING_MARKETING"],
    "Office Supplies": ACCOUNT_CODES["OFFICE_SUPPLIES"],
    "Professional Fees": ACCOUNT_CODES["PROFESSIONAL_FEES"],
    "Insurance": ACCOUNT_CODES["INSURANCE_EXPENSE"],
    "Rent": ACCOUNT_CODES["RENT_EXPENSE"],
    "Utilities": ACCOUNT_CODES["UTILITIES_EXPENSE"],
    "Telephone": ACCOUNT_CODES["UTILITIES_EXPENSE"],
    "Internet": ACCOUNT_CODES["UTILITIES_EXPENSE"],
    "Software Subscriptions": ACCOUNT_CODES["OFFICE_SUPPLIES"],
    "Travel": ACCOUNT_CODES["TRAVEL_MEALS"],
    "Meals & Entertainment": ACCOUNT_CODES["TRAVEL_MEALS"],
    "Fuel": ACCOUNT_CODES["TRAVEL_MEALS"],
    "Vehicle Maintenance": ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"],
    "Salaries & Wages": ACCOUNT_CODES["SALARIES_WAGES"],
    "Interest Expense": ACCOUNT_CODES["INTEREST_EXPENSE"],
    "Bank Charges": ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"],
    "Credit Card Fees": ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"],
    "Miscellaneous": ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"],
}


@dataclass(frozen=True)
class BankCategory:
    """Aggregator category tag of a bank transaction."""

    primary: str
    detailed: str = ""


def map_category(category: BankCategory) -> str:
    """Map a bank category to a chart-of-accounts category name.

    The detailed code is tried first, then the primary group; anything
    unknown lands in "Miscellaneous".
    """
    if category.detailed in DETAILED_CATEGORY_MAP:
        return DETAILED_CATEGORY_MAP[category.detailed]
    if category.primary in PRIMARY_CATEGORY_MAP:
        return PRIMARY_CATEGORY_MAP[category.primary]
    return DEFAULT_CATEGORY


def map_category_with_merchant(category: BankCategory, merchant_name: Optional[str] = None) -> str:
    """Map a bank category, letting known merchants override the result."""
    if merchant_name:
        upper_merchant = merchant_name.upper()
        for merchant, category_name in MERCHANT_OVERRIDES.items():
            if merchant in upper_merchant:
                return category_name
    return map_category(category)


def get_transaction_kind(category: BankCategory) -> TransactionKind:
    """Classify a bank category as income or expense."""
    if category.primary in ("INCOME", "TRANSFER_IN"):
        return TransactionKind.INCOME
    return TransactionKind.EXPENSE


def should_ignore_transaction(category: BankCategory) -> bool:
    """Return True for account-to-account transfers that must not be booked."""
    return category.detailed in IGNORED_DETAILED_CATEGORIES


def get_transaction_type_from_category(
    category: Optional[BankCategory], description: Optional[str] = None
) -> Optional[TransactionType]:
    """Derive a journal transaction type from a bank category.

    Args:
        category: Bank category, or None when the feed did not supply one
        description: Transaction description, used as a secondary signal

    Returns:
        Transaction type, or None when there is no category to go on
    """
    if category is None:
        return None

    primary = category.primary.upper()
    detailed = (category.detailed or "").upper()
    desc = (description or "").lower()

    if primary == "LOAN_PAYMENTS" or "loan payment" in desc:
        return TransactionType.LOAN_PAYMENT
    if "CREDIT_CARD_PAYMENT" in detailed or "credit card payment" in desc:
        return TransactionType.CREDIT_CARD_PAYMENT
    if primary == "TAX" or "tax payment" in desc:
        return TransactionType.TAX_PAYMENT
    if "PAYROLL" in detailed or "payroll" in desc:
        return TransactionType.PAYROLL
    if any(word in desc for word in ("equipment", "computer", "furniture")):
        return TransactionType.ASSET_PURCHASE
    if "inventory" in desc or "merchandise" in desc:
        return TransactionType.INVENTORY_PURCHASE
    if primary in ("TRANSFER_IN", "TRANSFER_OUT"):
        return TransactionType.TRANSFER
    if primary in ("INCOME", "DEPOSIT"):
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def default_account_code_for_category(category_name: str) -> str:
    """Return the default-chart account code for a category name."""
    return CATEGORY_ACCOUNT_CODES.get(category_name, ACCOUNT_CODES["MISCELLANEOUS_EXPENSE"])
