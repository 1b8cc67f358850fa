"""Utility functions for ledgerpost."""

from ledgerpost.utils.date_parser import parse_date
from ledgerpost.utils.amount_parser import parse_amount, parse_optional_amount

__all__ = ["parse_date", "parse_amount", "parse_optional_amount"]
