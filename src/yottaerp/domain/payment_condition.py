"""Payment condition domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import (
    CalculatedDeadline,
    PaymentCondition as PaymentConditionEntity,
)
from yottaerp.domain.errors import (
    ConflictError,
    InvalidInstallmentCount,
    PaymentConditionNotFound,
    ValidationError,
)
from yottaerp.domain.payment_calculator import calculate_deadlines
from yottaerp.domain.tenant import TenantContext, require_payment_condition


class PaymentConditionService:
    """Service for managing payment conditions."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize payment condition service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def create_payment_condition(
        self,
        name: str,
        days_to_first_due: int = 0,
        gap_between_dues: int = 0,
        number_of_dues: int = 1,
        is_end_of_month: bool = False,
        active: bool = True,
    ) -> int:
        """Create a payment condition.

        Args:
            name: Condition name (e.g., "RB 30-60 FM")
            days_to_first_due: Days from document date to the first due date
            gap_between_dues: Days between consecutive due dates
            number_of_dues: Number of installments
            is_end_of_month: Move every due date to the end of its month
            active: Whether documents may select this condition

        Returns:
            Payment condition ID

        Raises:
            ValidationError: If day offsets are negative
            InvalidInstallmentCount: If number_of_dues is below 1
            ConflictError: If the name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Payment condition name cannot be empty")
        if days_to_first_due < 0 or gap_between_dues < 0:
            raise ValidationError("Days to first due and gap between dues cannot be negative")
        if number_of_dues < 1:
            raise InvalidInstallmentCount(
                f"Number of dues must be at least 1 (got {number_of_dues})"
            )
        if self.db.get_payment_condition_by_name(self.tenant.organization_id, name) is not None:
            raise ConflictError(f"Payment condition '{name}' already exists")

        return self.db.create_payment_condition(
            organization_id=self.tenant.organization_id,
            name=name,
            days_to_first_due=days_to_first_due,
            gap_between_dues=gap_between_dues,
            number_of_dues=number_of_dues,
            is_end_of_month=is_end_of_month,
            active=active,
        )

    def get_payment_condition(self, payment_condition_id: int) -> PaymentConditionEntity:
        """Get a payment condition of the organization."""
        return require_payment_condition(self.db, self.tenant, payment_condition_id)

    def list_payment_conditions(self, active_only: bool = False) -> list[PaymentConditionEntity]:
        """List payment conditions of the organization."""
        return self.db.list_payment_conditions(
            self.tenant.organization_id, active_only=active_only
        )

    def resolve_payment_condition(
        self, payment_condition: Optional[str | int]
    ) -> Optional[int]:
        """Resolve a payment condition name or ID to an ID; None passes through."""
        if payment_condition is None or payment_condition == "":
            return None
        if isinstance(payment_condition, int) or payment_condition.isdigit():
            return self.get_payment_condition(int(payment_condition)).id

        found = self.db.get_payment_condition_by_name(
            self.tenant.organization_id, payment_condition
        )
        if found is None:
            raise PaymentConditionNotFound(f"Payment condition '{payment_condition}' not found")
        return found.id

    def preview_deadlines(
        self,
        payment_condition_id: int,
        total_amount: Decimal,
        base_date: Optional[date] = None,
    ) -> list[CalculatedDeadline]:
        """Compute the schedule a condition would produce, without saving it."""
        condition = self.get_payment_condition(payment_condition_id)
        return calculate_deadlines(total_amount, condition, base_date)
