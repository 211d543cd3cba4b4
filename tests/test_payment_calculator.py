"""Tests for payment deadline calculation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from yottaerp.domain.entities import CalculatedDeadline, PaymentTerms
from yottaerp.domain.errors import InvalidAmount, InvalidInstallmentCount, ValidationError
from yottaerp.domain.payment_calculator import (
    calculate_deadlines,
    format_deadline,
    validate_deadlines_sum,
)


def terms(days=0, gap=0, dues=1, eom=False):
    return PaymentTerms(
        days_to_first_due=days,
        gap_between_dues=gap,
        number_of_dues=dues,
        is_end_of_month=eom,
    )


class TestSchedule:
    """Dates and amounts of a schedule."""

    def test_two_dues_thirty_days_apart(self):
        deadlines = calculate_deadlines(
            Decimal("1000.00"), terms(days=30, gap=30, dues=2), date(2024, 1, 15)
        )
        assert deadlines == [
            CalculatedDeadline(date(2024, 2, 14), Decimal("500.00"), 1),
            CalculatedDeadline(date(2024, 3, 15), Decimal("500.00"), 2),
        ]

    def test_last_installment_absorbs_remainder(self):
        deadlines = calculate_deadlines(Decimal("100.00"), terms(dues=3), date(2024, 1, 1))
        assert [d.amount for d in deadlines] == [
            Decimal("33.33"),
            Decimal("33.33"),
            Decimal("33.34"),
        ]
        assert sum(d.amount for d in deadlines) == Decimal("100.00")

    def test_amount_per_due_rounds_half_up(self):
        # 100.01 / 2 = 50.005 -> 50.01, last gets 50.00
        deadlines = calculate_deadlines(Decimal("100.01"), terms(dues=2), date(2024, 1, 1))
        assert [d.amount for d in deadlines] == [Decimal("50.01"), Decimal("50.00")]

    def test_single_due_gets_full_amount(self):
        deadlines = calculate_deadlines(Decimal("99.99"), terms(days=60), date(2024, 1, 15))
        assert deadlines == [CalculatedDeadline(date(2024, 3, 15), Decimal("99.99"), 1)]

    def test_immediate_payment(self):
        deadlines = calculate_deadlines(Decimal("50.00"), terms(), date(2024, 5, 20))
        assert deadlines[0].due_date == date(2024, 5, 20)

    @pytest.mark.parametrize("dues", [1, 2, 3, 6, 7, 12])
    def test_sum_is_exact(self, dues):
        total = Decimal("1234.57")
        deadlines = calculate_deadlines(total, terms(gap=30, dues=dues), date(2024, 1, 1))
        assert len(deadlines) == dues
        assert [d.installment_number for d in deadlines] == list(range(1, dues + 1))
        assert sum(d.amount for d in deadlines) == total

    def test_accepts_string_total(self):
        deadlines = calculate_deadlines("10.00", terms(), date(2024, 1, 1))
        assert deadlines[0].amount == Decimal("10.00")

    def test_datetime_base_date_is_truncated(self):
        deadlines = calculate_deadlines(
            Decimal("10.00"), terms(days=1), datetime(2024, 1, 1, 23, 59)
        )
        assert deadlines[0].due_date == date(2024, 1, 2)

    def test_base_date_defaults_to_today(self):
        deadlines = calculate_deadlines(Decimal("10.00"), terms())
        assert deadlines[0].due_date == date.today()

    def test_repeatable(self):
        condition = terms(days=30, gap=30, dues=3, eom=True)
        first = calculate_deadlines(Decimal("500.00"), condition, date(2024, 1, 15))
        second = calculate_deadlines(Decimal("500.00"), condition, date(2024, 1, 15))
        assert first == second


class TestEndOfMonth:
    """End-of-month snapping."""

    def test_month_end_base_with_no_days(self):
        deadlines = calculate_deadlines(
            Decimal("100.00"), terms(eom=True), date(2024, 1, 31)
        )
        assert deadlines[0].due_date == date(2024, 1, 31)

    def test_snaps_after_first_offset(self):
        # 2024-01-31 + 30 days = 2024-03-01 -> 2024-03-31
        deadlines = calculate_deadlines(
            Decimal("100.00"), terms(days=30, eom=True), date(2024, 1, 31)
        )
        assert deadlines[0].due_date == date(2024, 3, 31)

    def test_snaps_after_every_gap(self):
        deadlines = calculate_deadlines(
            Decimal("300.00"), terms(days=30, gap=30, dues=3, eom=True), date(2024, 1, 15)
        )
        # 02-14 -> 02-29; +30 = 03-30 -> 03-31; +30 = 04-30 -> 04-30
        assert [d.due_date for d in deadlines] == [
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_december_rolls_into_next_year(self):
        deadlines = calculate_deadlines(
            Decimal("200.00"), terms(days=30, gap=30, dues=2, eom=True), date(2024, 12, 15)
        )
        # 2025-01-14 -> 2025-01-31; +30 = 2025-03-02 -> 2025-03-31
        assert [d.due_date for d in deadlines] == [date(2025, 1, 31), date(2025, 3, 31)]

    def test_december_month_end_with_no_offset(self):
        deadlines = calculate_deadlines(
            Decimal("200.00"), terms(gap=31, dues=2, eom=True), date(2024, 12, 10)
        )
        assert [d.due_date for d in deadlines] == [date(2024, 12, 31), date(2025, 1, 31)]


class TestErrors:
    """Invalid inputs fail before producing a schedule."""

    @pytest.mark.parametrize("total", [Decimal("0"), Decimal("-10.00"), "0.00"])
    def test_total_must_be_positive(self, total):
        with pytest.raises(InvalidAmount):
            calculate_deadlines(total, terms(), date(2024, 1, 1))

    @pytest.mark.parametrize("dues", [0, -1])
    def test_at_least_one_due(self, dues):
        with pytest.raises(InvalidInstallmentCount):
            calculate_deadlines(Decimal("10.00"), terms(dues=dues), date(2024, 1, 1))

    def test_negative_days(self):
        with pytest.raises(ValidationError):
            calculate_deadlines(Decimal("10.00"), terms(days=-1), date(2024, 1, 1))


def test_validate_deadlines_sum():
    deadlines = calculate_deadlines(Decimal("100.00"), terms(dues=3), date(2024, 1, 1))
    assert validate_deadlines_sum(deadlines, Decimal("100.00"))
    assert validate_deadlines_sum(deadlines, Decimal("100.01"))
    assert not validate_deadlines_sum(deadlines, Decimal("100.02"))


def test_format_deadline():
    deadline = CalculatedDeadline(date(2024, 1, 31), Decimal("500"), 1)
    assert format_deadline(deadline) == "Rata 1 - 31/01/2024 - € 500.00"
