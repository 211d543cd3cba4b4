"""Document domain service.

Creates and updates documents together with their lines, stock movements
and payment deadlines. Each operation validates its references against the
acting organization, computes everything with ``compute_document`` and then
writes inside one database transaction, so a failure leaves nothing behind.

A line-set update deletes the document's movements, lines and deadlines and
writes them again as a fresh create would.
"""

import logging
from datetime import date
from typing import Any, Optional, Sequence

from yottaerp.database.base import Database
from yottaerp.domain.entities import (
    Document as DocumentEntity,
    DocumentComputation,
    DocumentContext,
    DocumentTypeConfig,
    LineInput,
    PaymentCondition,
    PaymentDeadline,
    Product,
)
from yottaerp.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_document_number,
)
from yottaerp.domain.document_totals import category_for_type_code, compute_document
from yottaerp.domain.payment_calculator import calculate_deadlines
from yottaerp.domain.tenant import (
    TenantContext,
    optional_warehouse,
    require_document,
    require_document_type,
    require_payment_condition,
    require_product,
)
from yottaerp.utils.decimal_utils import ZERO, round2, round4

logger = logging.getLogger(__name__)

NUMBER_WIDTH = 6


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def next_document_number(used_numbers: Sequence[str]) -> str:
    """Return the next number of a series, zero padded to 6 digits.

    >>> next_document_number(["000001", "000002"])
    '000003'
    """
    numeric = [int(n) for n in used_numbers if n.isdigit()]
    next_number = max(numeric) + 1 if numeric else 1
    return str(next_number).zfill(NUMBER_WIDTH)


class DocumentService:
    """Service for managing documents."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize document service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def create_document(
        self,
        document_type_id: int,
        lines: Sequence[LineInput],
        document_date: Optional[date] = None,
        number: Optional[str] = None,
        main_warehouse_id: Optional[int] = None,
        payment_condition_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a document with lines, stock movements and deadlines.

        Args:
            document_type_id: Document type configuration
            lines: Line inputs in document order
            document_date: Document date (defaults to today); also the base
                date of the payment schedule
            number: Explicit number; generated from the numbering series if None
            main_warehouse_id: Fallback warehouse for lines
            payment_condition_id: Payment condition generating the deadlines
            notes: Optional notes

        Returns:
            Document ID

        Raises:
            DocumentTypeNotFound, WarehouseNotFound, ProductNotFound,
            PaymentConditionNotFound: If a reference does not exist
            CrossTenantAccessDenied: If a reference belongs to another organization
            ValidationError: If the type is inactive or there are no lines
            ConflictError: If the explicit number is already used in the series
        """
        document_type = require_document_type(self.db, self.tenant, document_type_id)
        if not document_type.active:
            raise ValidationError(f"Document type {document_type.code} is not active")
        if not lines:
            raise ValidationError("A document needs at least one line")

        optional_warehouse(self.db, self.tenant, main_warehouse_id)
        condition = self._load_payment_condition(payment_condition_id)
        if document_date is None:
            document_date = date.today()

        computation = self._compute(
            lines, document_type, document_date, main_warehouse_id, condition
        )

        with self.db.transaction():
            document_number = self._assign_number(document_type, number)
            document_id = self.db.create_document(
                organization_id=self.tenant.organization_id,
                document_type_id=document_type.id,
                category=category_for_type_code(document_type.code).value,
                numerator_code=document_type.numerator_code,
                number=document_number,
                date=document_date,
                net_total=computation.net_total,
                vat_total=computation.vat_total,
                gross_total=computation.gross_total,
                main_warehouse_id=main_warehouse_id,
                payment_condition_id=payment_condition_id,
                notes=notes,
            )
            self._write_lines(document_id, document_number, document_type, computation)

        logger.info(
            "Created document %s %s (id=%d, lines=%d, gross=%s, movements=%d, deadlines=%d)",
            document_type.code,
            document_number,
            document_id,
            len(computation.lines),
            computation.gross_total,
            len(computation.stock_movements),
            len(computation.deadlines),
        )
        return document_id

    def update_document(
        self,
        document_id: int,
        lines: Optional[Sequence[LineInput]] = None,
        document_date: Optional[date] = None,
        main_warehouse_id: Optional[int] = UNSET,
        payment_condition_id: Optional[int] = UNSET,
        notes: Optional[str] = UNSET,
    ) -> None:
        """Update a document.

        With ``lines`` the whole line set is replaced: stock movements, lines
        and deadlines are deleted and rebuilt from the new lines, exactly as
        a create with the same inputs would. Without ``lines`` only header
        fields change; the payment schedule is regenerated from the stored
        gross total when the payment condition or the date changes.

        Number and document type cannot be changed. Pass None to clear
        main_warehouse_id, payment_condition_id or notes; leave them out to
        keep the stored values.

        Raises:
            DocumentNotFound: If the document does not exist
            CrossTenantAccessDenied: If a referenced record belongs to another organization
            ValidationError: If lines is an empty list
        """
        existing = require_document(self.db, self.tenant, document_id)
        document_type = require_document_type(self.db, self.tenant, existing.document_type_id)

        new_date = document_date if document_date is not None else existing.date
        new_warehouse_id = (
            existing.main_warehouse_id if main_warehouse_id is UNSET else main_warehouse_id
        )
        new_condition_id = (
            existing.payment_condition_id
            if payment_condition_id is UNSET
            else payment_condition_id
        )
        optional_warehouse(self.db, self.tenant, new_warehouse_id)
        condition = self._load_payment_condition(
            new_condition_id,
            require_active=new_condition_id != existing.payment_condition_id,
        )

        header: dict[str, Any] = {
            "date": new_date,
            "main_warehouse_id": new_warehouse_id,
            "payment_condition_id": new_condition_id,
        }
        if notes is not UNSET:
            header["notes"] = notes

        if lines is not None:
            if not lines:
                raise ValidationError("A document needs at least one line")
            computation = self._compute(
                lines, document_type, new_date, new_warehouse_id, condition
            )
            header.update(
                net_total=computation.net_total,
                vat_total=computation.vat_total,
                gross_total=computation.gross_total,
            )
            with self.db.transaction():
                removed = self.db.delete_document_stock_movements(document_id)
                self.db.delete_document_lines(document_id)
                self.db.delete_payment_deadlines(document_id)
                self._write_lines(document_id, existing.number, document_type, computation)
                self.db.update_document_header(document_id, **header)
            logger.info(
                "Rebuilt document %s (id=%d): %d movements replaced by %d, gross %s -> %s",
                existing.number,
                document_id,
                removed,
                len(computation.stock_movements),
                existing.gross_total,
                computation.gross_total,
            )
            return

        reschedule = new_condition_id != existing.payment_condition_id or new_date != existing.date
        with self.db.transaction():
            if reschedule:
                self.db.delete_payment_deadlines(document_id)
                if condition is not None and existing.gross_total != ZERO:
                    for deadline in calculate_deadlines(existing.gross_total, condition, new_date):
                        self.db.add_payment_deadline(
                            document_id=document_id,
                            installment_number=deadline.installment_number,
                            due_date=deadline.due_date,
                            amount=round2(deadline.amount),
                        )
            self.db.update_document_header(document_id, **header)
        logger.info(
            "Updated document %s (id=%d)%s",
            existing.number,
            document_id,
            ", payment schedule regenerated" if reschedule else "",
        )

    def get_document(self, document_id: int) -> DocumentEntity:
        """Get a document of the organization with its lines and deadlines."""
        return require_document(self.db, self.tenant, document_id)

    def list_documents(
        self,
        document_type_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DocumentEntity]:
        """List document headers of the organization, newest first."""
        if document_type_id is not None:
            require_document_type(self.db, self.tenant, document_type_id)
        return self.db.list_documents(
            self.tenant.organization_id,
            document_type_id=document_type_id,
            start_date=start_date,
            end_date=end_date,
        )

    def delete_document(self, document_id: int) -> None:
        """Delete a document with its lines, deadlines and stock movements."""
        document = require_document(self.db, self.tenant, document_id)
        with self.db.transaction():
            self.db.delete_document_stock_movements(document_id)
            self.db.delete_document(document_id)
        logger.info("Deleted document %s (id=%d)", document.number, document_id)

    def propose_document_number(self, document_type_id: int) -> str:
        """Return the number the next document of this type would get."""
        document_type = require_document_type(self.db, self.tenant, document_type_id)
        return next_document_number(
            self.db.list_document_numbers(
                self.tenant.organization_id, document_type.numerator_code
            )
        )

    def list_deadlines(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        document_id: Optional[int] = None,
    ) -> list[PaymentDeadline]:
        """List installments of the organization ordered by due date."""
        if document_id is not None:
            require_document(self.db, self.tenant, document_id)
        return self.db.list_payment_deadlines(
            self.tenant.organization_id,
            document_id=document_id,
            start_date=start_date,
            end_date=end_date,
        )

    def _load_payment_condition(
        self, payment_condition_id: Optional[int], require_active: bool = True
    ) -> Optional[PaymentCondition]:
        if payment_condition_id is None:
            return None
        condition = require_payment_condition(self.db, self.tenant, payment_condition_id)
        if require_active and not condition.active:
            raise ValidationError(f"Payment condition '{condition.name}' is not active")
        return condition

    def _load_products(self, lines: Sequence[LineInput]) -> dict[int, Product]:
        products: dict[int, Product] = {}
        for line in lines:
            if line.warehouse_id is not None:
                optional_warehouse(self.db, self.tenant, line.warehouse_id)
            if line.product_id is not None and line.product_id not in products:
                products[line.product_id] = require_product(self.db, self.tenant, line.product_id)
        return products

    def _compute(
        self,
        lines: Sequence[LineInput],
        document_type: DocumentTypeConfig,
        document_date: date,
        main_warehouse_id: Optional[int],
        condition: Optional[PaymentCondition],
    ) -> DocumentComputation:
        context = DocumentContext(
            document_type=document_type,
            document_date=document_date,
            main_warehouse_id=main_warehouse_id,
            payment_condition=condition,
        )
        return compute_document(lines, context, self._load_products(lines))

    def _assign_number(self, document_type: DocumentTypeConfig, number: Optional[str]) -> str:
        used = self.db.list_document_numbers(
            self.tenant.organization_id, document_type.numerator_code
        )
        if not number:
            return next_document_number(used)

        number = number.strip()
        if not number.isdigit():
            raise ValidationError(f"Document number must be numeric (got '{number}')")
        number = number.zfill(NUMBER_WIDTH)
        if number in used:
            raise ConflictError(duplicate_document_number(number, document_type.numerator_code))
        return number

    def _write_lines(
        self,
        document_id: int,
        document_number: str,
        document_type: DocumentTypeConfig,
        computation: DocumentComputation,
    ) -> None:
        for line in computation.lines:
            self.db.add_document_line(
                document_id=document_id,
                line_number=line.line_number,
                product_id=line.product_id,
                product_code=line.product_code,
                description=line.description,
                quantity=round4(line.quantity),
                unit_price=round2(line.unit_price),
                vat_rate=round4(line.vat_rate),
                net_amount=line.totals.net_amount,
                vat_amount=line.totals.vat_amount,
                gross_amount=line.totals.gross_amount,
            )

        for movement in computation.stock_movements:
            logger.debug(
                "Line %d: %s %s of product %d in warehouse %d",
                movement.line_number,
                movement.movement_type.value,
                movement.quantity,
                movement.product_id,
                movement.warehouse_id,
            )
            self.db.create_stock_movement(
                organization_id=self.tenant.organization_id,
                product_id=movement.product_id,
                warehouse_id=movement.warehouse_id,
                quantity=round4(movement.quantity),
                movement_type=movement.movement_type.value,
                document_type_id=document_type.id,
                document_id=document_id,
                document_number=document_number,
                line_number=movement.line_number,
            )

        for deadline in computation.deadlines:
            self.db.add_payment_deadline(
                document_id=document_id,
                installment_number=deadline.installment_number,
                due_date=deadline.due_date,
                amount=round2(deadline.amount),
            )
