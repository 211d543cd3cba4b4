"""Payment deadline calculator.

Splits a total into installments according to a payment condition. The
amount per installment is rounded half up to cents and the last installment
absorbs the remainder, so the schedule always sums exactly to the total.

With ``is_end_of_month`` every due date is moved to the last day of its
month. The snap is applied again after each gap, so the distance between two
end-of-month installments follows the calendar rather than the gap.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from yottaerp.domain.entities import CalculatedDeadline
from yottaerp.domain.errors import (
    InvalidAmount,
    InvalidInstallmentCount,
    ValidationError,
)
from yottaerp.utils.date_parser import end_of_month, format_date_italian
from yottaerp.utils.decimal_utils import MONEY_CONTEXT, ZERO, round2, to_decimal

SUM_TOLERANCE = Decimal("0.01")


class SupportsPaymentTerms(Protocol):
    days_to_first_due: int
    gap_between_dues: int
    number_of_dues: int
    is_end_of_month: bool


def calculate_deadlines(
    total_amount: Decimal | str,
    condition: SupportsPaymentTerms,
    base_date: Optional[date] = None,
) -> list[CalculatedDeadline]:
    """Calculate the installment schedule for an amount.

    Args:
        total_amount: Amount to split, must be greater than zero
        condition: Payment condition or PaymentTerms
        base_date: Date the first offset is counted from (defaults to today)

    Returns:
        Deadlines ordered by installment number

    Raises:
        InvalidAmount: If total_amount is zero or negative
        InvalidInstallmentCount: If the condition has fewer than one due
        ValidationError: If a day offset is negative
    """
    total = to_decimal(total_amount)
    if total <= ZERO:
        raise InvalidAmount(f"Total amount must be greater than zero (got {total})")

    number_of_dues = condition.number_of_dues
    if number_of_dues < 1:
        raise InvalidInstallmentCount(
            f"Number of dues must be at least 1 (got {number_of_dues})"
        )
    if condition.days_to_first_due < 0 or condition.gap_between_dues < 0:
        raise ValidationError("Days to first due and gap between dues cannot be negative")

    if base_date is None:
        base_date = date.today()
    elif isinstance(base_date, datetime):
        base_date = base_date.date()

    amount_per_due = round2(MONEY_CONTEXT.divide(total, Decimal(number_of_dues)))
    first_dues_total = MONEY_CONTEXT.multiply(amount_per_due, Decimal(number_of_dues - 1))
    last_due_amount = MONEY_CONTEXT.subtract(total, first_dues_total)

    current = base_date + timedelta(days=condition.days_to_first_due)
    if condition.is_end_of_month:
        current = end_of_month(current)

    deadlines = []
    for installment in range(1, number_of_dues + 1):
        is_last = installment == number_of_dues
        deadlines.append(
            CalculatedDeadline(
                due_date=current,
                amount=last_due_amount if is_last else amount_per_due,
                installment_number=installment,
            )
        )
        if not is_last:
            current = current + timedelta(days=condition.gap_between_dues)
            if condition.is_end_of_month:
                current = end_of_month(current)

    return deadlines


def validate_deadlines_sum(
    deadlines: Sequence[CalculatedDeadline], expected_total: Decimal
) -> bool:
    """Check that a schedule adds up to the expected total, within one cent."""
    total = sum((d.amount for d in deadlines), ZERO)
    return abs(total - to_decimal(expected_total)) <= SUM_TOLERANCE


def format_deadline(deadline: CalculatedDeadline) -> str:
    """Format as ``"Rata 1 - 31/01/2024 - € 500.00"``."""
    return (
        f"Rata {deadline.installment_number} - "
        f"{format_date_italian(deadline.due_date)} - "
        f"€ {deadline.amount:.2f}"
    )
