"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024" (day first), "January 15, 2024"
    - Relative dates: "today", "yesterday", "tomorrow", "end of month"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "oggi": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "end of month": end_of_month(today),
        "fine mese": end_of_month(today),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # ISO dates are year first; everything else follows the Italian day-first order
    dayfirst = not (len(date_str) >= 4 and date_str[:4].isdigit())
    try:
        dt = date_parser.parse(date_str, dayfirst=dayfirst)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def end_of_month(value: date) -> date:
    """Return the last calendar day of the month of ``value``.

    >>> end_of_month(date(2024, 2, 10))
    datetime.date(2024, 2, 29)
    """
    return value + relativedelta(day=31)


def format_date_italian(value: date) -> str:
    """Format as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")
