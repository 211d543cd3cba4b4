"""Monetary arithmetic on Decimal values.

Money is never a float. Every rounding in this module goes through
``MONEY_CONTEXT``, which rounds half up as Italian fiscal rules require, so
results do not depend on the thread's default decimal context.
"""

from decimal import Decimal, Context, InvalidOperation, ROUND_HALF_UP

from yottaerp.domain.entities import LineTotals, VATBreakdown
from yottaerp.domain.errors import InvalidNumericFormat, invalid_numeric_format

MONEY_CONTEXT = Context(prec=28, rounding=ROUND_HALF_UP)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a value to Decimal without going through binary floating point.

    Strings are parsed digit for digit. Floats are converted through their
    shortest string representation, so ``19.99`` becomes ``Decimal("19.99")``.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal value

    Raises:
        InvalidNumericFormat: If the value is not a finite decimal number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidNumericFormat(invalid_numeric_format(value))
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidNumericFormat(invalid_numeric_format(value)) from None
    else:
        raise InvalidNumericFormat(invalid_numeric_format(value))

    if not result.is_finite():
        raise InvalidNumericFormat(invalid_numeric_format(value))
    return result


def round2(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return value.quantize(TWO_PLACES, context=MONEY_CONTEXT)


def round4(value: Decimal) -> Decimal:
    """Round to 4 decimal places, half up (quantities and VAT rates)."""
    return value.quantize(FOUR_PLACES, context=MONEY_CONTEXT)


def calculate_vat(net_amount: Decimal, vat_rate: Decimal) -> Decimal:
    """Return the VAT due on a net amount.

    >>> calculate_vat(Decimal("100.00"), Decimal("0.22"))
    Decimal('22.00')
    """
    return round2(MONEY_CONTEXT.multiply(net_amount, vat_rate))


def calculate_gross(net_amount: Decimal, vat_rate: Decimal) -> Decimal:
    """Return net amount plus VAT.

    >>> calculate_gross(Decimal("100.00"), Decimal("0.22"))
    Decimal('122.00')
    """
    return round2(MONEY_CONTEXT.add(net_amount, calculate_vat(net_amount, vat_rate)))


def extract_vat(gross_amount: Decimal, vat_rate: Decimal) -> VATBreakdown:
    """Split a VAT-inclusive amount into net and VAT (scorporo).

    The net part is rounded; the VAT part is the unrounded difference, so
    ``net + vat == gross`` holds even for a gross with more than 2 decimals.

    Args:
        gross_amount: Amount including VAT
        vat_rate: VAT rate as a fraction (e.g. 0.22)

    Returns:
        VATBreakdown with net and vat
    """
    divisor = MONEY_CONTEXT.add(ONE, vat_rate)
    net = round2(MONEY_CONTEXT.divide(gross_amount, divisor))
    vat = MONEY_CONTEXT.subtract(gross_amount, net)
    return VATBreakdown(net=net, vat=vat)


def calculate_line_total(
    quantity: Decimal, unit_price: Decimal, vat_rate: Decimal
) -> LineTotals:
    """Price a document line.

    Args:
        quantity: Line quantity
        unit_price: Net unit price
        vat_rate: VAT rate as a fraction

    Returns:
        LineTotals with net, VAT and gross amounts, each rounded to 2 places
    """
    net_amount = round2(MONEY_CONTEXT.multiply(quantity, unit_price))
    vat_amount = round2(MONEY_CONTEXT.multiply(net_amount, vat_rate))
    gross_amount = round2(MONEY_CONTEXT.add(net_amount, vat_amount))
    return LineTotals(
        net_amount=net_amount, vat_amount=vat_amount, gross_amount=gross_amount
    )


def format_currency(value: Decimal, currency: str = "€") -> str:
    """Format as ``"€ 19.99"``."""
    return f"{currency} {round2(value):.2f}"


def format_decimal_italian(value: Decimal) -> str:
    """Format with 2 digits and a decimal comma, as printed on Italian documents."""
    return f"{round2(value):.2f}".replace(".", ",")
