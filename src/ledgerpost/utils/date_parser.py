"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str, dayfirst: bool = False) -> date:
    """Parse a statement date into a date object.

    Accepts anything python-dateutil understands ("2024-01-15",
    "Jan 15, 2024", "15/01/2024" with ``dayfirst``) plus "today" and
    "yesterday".

    Args:
        date_str: Date string
        dayfirst: Read ambiguous numeric dates as day/month

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    try:
        return date_parser.parse(text, dayfirst=dayfirst).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
