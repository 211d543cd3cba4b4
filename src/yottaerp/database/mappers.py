"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from yottaerp.domain import entities as domain
from yottaerp.database.models import (
    Organization as ORMOrganization,
    Warehouse as ORMWarehouse,
    ProductType as ORMProductType,
    Product as ORMProduct,
    DocumentTypeConfig as ORMDocumentTypeConfig,
    PaymentCondition as ORMPaymentCondition,
    Document as ORMDocument,
    DocumentLine as ORMDocumentLine,
    PaymentDeadline as ORMPaymentDeadline,
    StockMovement as ORMStockMovement,
)


def organization_to_domain(orm_org: ORMOrganization) -> domain.Organization:
    """Convert SQLAlchemy Organization model to domain Organization entity."""
    return domain.Organization(
        id=orm_org.id,
        code=orm_org.code,
        name=orm_org.name,
        created_at=orm_org.created_at,
    )


def warehouse_to_domain(orm_warehouse: ORMWarehouse) -> domain.Warehouse:
    """Convert SQLAlchemy Warehouse model to domain Warehouse entity."""
    return domain.Warehouse(
        id=orm_warehouse.id,
        organization_id=orm_warehouse.organization_id,
        code=orm_warehouse.code,
        name=orm_warehouse.name,
        created_at=orm_warehouse.created_at,
    )


def product_type_to_domain(orm_type: ORMProductType) -> domain.ProductType:
    """Convert SQLAlchemy ProductType model to domain ProductType entity."""
    return domain.ProductType(
        id=orm_type.id,
        organization_id=orm_type.organization_id,
        code=orm_type.code,
        description=orm_type.description,
        manage_stock=bool(orm_type.manage_stock),
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    product_type = orm_product.product_type
    return domain.Product(
        id=orm_product.id,
        organization_id=orm_product.organization_id,
        code=orm_product.code,
        name=orm_product.name,
        description=orm_product.description,
        price=orm_product.price,
        vat_rate=orm_product.vat_rate,
        product_type_id=orm_product.product_type_id,
        default_warehouse_id=orm_product.default_warehouse_id,
        manage_stock=bool(product_type.manage_stock) if product_type is not None else False,
    )


def document_type_to_domain(orm_type: ORMDocumentTypeConfig) -> domain.DocumentTypeConfig:
    """Convert SQLAlchemy DocumentTypeConfig model to domain entity."""
    return domain.DocumentTypeConfig(
        id=orm_type.id,
        organization_id=orm_type.organization_id,
        code=orm_type.code,
        description=orm_type.description,
        numerator_code=orm_type.numerator_code,
        active=bool(orm_type.active),
        inventory_movement=bool(orm_type.inventory_movement),
        valuation_impact=bool(orm_type.valuation_impact),
        operation_sign_stock=orm_type.operation_sign_stock,
        operation_sign_valuation=orm_type.operation_sign_valuation,
    )


def payment_condition_to_domain(orm_condition: ORMPaymentCondition) -> domain.PaymentCondition:
    """Convert SQLAlchemy PaymentCondition model to domain entity."""
    return domain.PaymentCondition(
        id=orm_condition.id,
        organization_id=orm_condition.organization_id,
        name=orm_condition.name,
        days_to_first_due=orm_condition.days_to_first_due,
        gap_between_dues=orm_condition.gap_between_dues,
        number_of_dues=orm_condition.number_of_dues,
        is_end_of_month=bool(orm_condition.is_end_of_month),
        active=bool(orm_condition.active),
    )


def document_line_to_domain(orm_line: ORMDocumentLine) -> domain.DocumentLine:
    """Convert SQLAlchemy DocumentLine model to domain entity."""
    return domain.DocumentLine(
        id=orm_line.id,
        document_id=orm_line.document_id,
        line_number=orm_line.line_number,
        product_id=orm_line.product_id,
        product_code=orm_line.product_code,
        description=orm_line.description,
        quantity=orm_line.quantity,
        unit_price=orm_line.unit_price,
        vat_rate=orm_line.vat_rate,
        net_amount=orm_line.net_amount,
        vat_amount=orm_line.vat_amount,
        gross_amount=orm_line.gross_amount,
    )


def payment_deadline_to_domain(orm_deadline: ORMPaymentDeadline) -> domain.PaymentDeadline:
    """Convert SQLAlchemy PaymentDeadline model to domain entity."""
    return domain.PaymentDeadline(
        id=orm_deadline.id,
        document_id=orm_deadline.document_id,
        installment_number=orm_deadline.installment_number,
        due_date=orm_deadline.due_date,
        amount=orm_deadline.amount,
    )


def document_to_domain(orm_document: ORMDocument, include_children: bool = True) -> domain.Document:
    """Convert SQLAlchemy Document model to domain Document entity.

    Lines and deadlines are loaded only when include_children is True.
    """
    lines: tuple[domain.DocumentLine, ...] = ()
    deadlines: tuple[domain.PaymentDeadline, ...] = ()
    if include_children:
        lines = tuple(document_line_to_domain(line) for line in orm_document.lines)
        deadlines = tuple(payment_deadline_to_domain(d) for d in orm_document.deadlines)

    return domain.Document(
        id=orm_document.id,
        organization_id=orm_document.organization_id,
        document_type_id=orm_document.document_type_id,
        category=domain.DocumentCategory(orm_document.category),
        number=orm_document.number,
        date=orm_document.date,
        main_warehouse_id=orm_document.main_warehouse_id,
        payment_condition_id=orm_document.payment_condition_id,
        notes=orm_document.notes,
        net_total=orm_document.net_total,
        vat_total=orm_document.vat_total,
        gross_total=orm_document.gross_total,
        created_at=orm_document.created_at,
        lines=lines,
        deadlines=deadlines,
    )


def stock_movement_to_domain(orm_movement: ORMStockMovement) -> domain.StockMovement:
    """Convert SQLAlchemy StockMovement model to domain entity."""
    return domain.StockMovement(
        id=orm_movement.id,
        organization_id=orm_movement.organization_id,
        product_id=orm_movement.product_id,
        warehouse_id=orm_movement.warehouse_id,
        quantity=orm_movement.quantity,
        movement_type=domain.MovementType(orm_movement.movement_type),
        document_type_id=orm_movement.document_type_id,
        document_id=orm_movement.document_id,
        document_number=orm_movement.document_number,
        line_number=orm_movement.line_number,
        created_at=orm_movement.created_at,
    )
