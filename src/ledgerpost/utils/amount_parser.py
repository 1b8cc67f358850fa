"""Amount parsing utilities for bank statement values."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional

CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a bank statement amount into a Decimal.

    Handles:
    - "123.45", "$123.45", "1,234.56"
    - "-123.45", "-$123.45"
    - "(123.45)" (negative in parentheses)
    - "123.45-" (trailing minus)
    - "123.45 DR" / "123.45 CR" (debit negative, credit positive)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip().upper()
    is_negative = False

    if text.endswith("DR"):
        is_negative = True
        text = text[:-2].strip()
    elif text.endswith("CR"):
        text = text[:-2].strip()

    if text.startswith("(") and text.endswith(")"):
        is_negative = not is_negative
        text = text[1:-1]

    if text.endswith("-"):
        is_negative = not is_negative
        text = text[:-1]

    text = CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")

    return -amount if is_negative else amount


def parse_optional_amount(amount_str: Optional[str]) -> Optional[Decimal]:
    """Parse an amount that may be blank. Blank values give None."""
    if amount_str is None or not amount_str.strip():
        return None
    return parse_amount(amount_str)
