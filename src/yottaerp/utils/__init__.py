"""Utility functions for yottaerp."""

from yottaerp.utils.date_parser import parse_date
from yottaerp.utils.amount_parser import parse_amount
from yottaerp.utils.decimal_utils import to_decimal
from yottaerp.utils.fallback import first_present

__all__ = ["parse_date", "parse_amount", "to_decimal", "first_present"]
