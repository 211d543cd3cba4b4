"""Amount parsing utilities."""

from decimal import Decimal
import re

from yottaerp.domain.errors import InvalidNumericFormat
from yottaerp.utils.decimal_utils import to_decimal


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles Italian and international formats:
    - "123.45"
    - "123,45"
    - "€ 1.234,56"
    - "1,234.56"
    - "-123,45"
    - "(123,45)" (negative in parentheses)

    When both separators appear, the last one is the decimal separator.
    A single comma is a decimal comma; repeated separators are thousands
    separators.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        InvalidNumericFormat: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise InvalidNumericFormat("Empty amount string")

    original = amount_str
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and inner whitespace
    amount_str = re.sub(r"[€$£¥\s]", "", amount_str)
    amount_str = amount_str.replace("EUR", "")

    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif amount_str.count(",") == 1:
        amount_str = amount_str.replace(",", ".")
    elif amount_str.count(",") > 1:
        amount_str = amount_str.replace(",", "")
    elif amount_str.count(".") > 1:
        amount_str = amount_str.replace(".", "")

    try:
        amount = to_decimal(amount_str)
    except InvalidNumericFormat:
        raise InvalidNumericFormat(f"Could not parse amount '{original}'") from None
    return -amount if is_negative else amount
