"""Tests for database mappers."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from yottaerp.database.models import (
    Organization as ORMOrganization,
    ProductType as ORMProductType,
    Product as ORMProduct,
    DocumentTypeConfig as ORMDocumentTypeConfig,
    PaymentCondition as ORMPaymentCondition,
    Document as ORMDocument,
    DocumentLine as ORMDocumentLine,
    PaymentDeadline as ORMPaymentDeadline,
    StockMovement as ORMStockMovement,
)
from yottaerp.database.mappers import (
    organization_to_domain,
    product_to_domain,
    document_type_to_domain,
    payment_condition_to_domain,
    document_to_domain,
    stock_movement_to_domain,
)
from yottaerp.domain.entities import (
    Document,
    DocumentCategory,
    MovementType,
    Organization,
    PaymentTerms,
    Product,
)


class TestOrganizationMapper:
    """Tests for Organization mapper."""

    def test_organization_to_domain(self):
        """Test converting ORM Organization to domain Organization."""
        orm_org = ORMOrganization(id=1, code="ACME", name="Acme", created_at=datetime.now(UTC))
        org = organization_to_domain(orm_org)

        assert isinstance(org, Organization)
        assert org.code == "ACME"
        assert org.created_at == orm_org.created_at


class TestProductMapper:
    """Tests for Product mapper."""

    def _product(self, product_type=None):
        return ORMProduct(
            id=5,
            organization_id=1,
            code="VITE-M8",
            name="Vite M8",
            description=None,
            price=Decimal("10.00"),
            vat_rate=Decimal("0.2200"),
            product_type_id=product_type.id if product_type is not None else None,
            default_warehouse_id=2,
            product_type=product_type,
        )

    def test_manage_stock_comes_from_type(self):
        """Test that stock management is read from the product type."""
        product_type = ORMProductType(
            id=3, organization_id=1, code="MERCE", description="Merce", manage_stock=True
        )
        product = product_to_domain(self._product(product_type))

        assert isinstance(product, Product)
        assert product.manage_stock is True
        assert product.product_type_id == 3
        assert product.default_warehouse_id == 2
        assert product.price == Decimal("10.00")

    def test_service_type(self):
        product_type = ORMProductType(
            id=4, organization_id=1, code="SERVIZIO", description="Servizi", manage_stock=False
        )
        assert product_to_domain(self._product(product_type)).manage_stock is False

    def test_untyped_product_is_not_stock_managed(self):
        assert product_to_domain(self._product()).manage_stock is False


def test_document_type_to_domain():
    orm_type = ORMDocumentTypeConfig(
        id=1,
        organization_id=1,
        code="FAI",
        description="Fattura Immediata",
        numerator_code="FAT",
        active=True,
        inventory_movement=True,
        valuation_impact=True,
        operation_sign_stock=-1,
        operation_sign_valuation=1,
    )
    doc_type = document_type_to_domain(orm_type)
    assert doc_type.numerator_code == "FAT"
    assert doc_type.inventory_movement is True
    assert doc_type.operation_sign_stock == -1


def test_payment_condition_to_domain():
    orm_condition = ORMPaymentCondition(
        id=1,
        organization_id=1,
        name="RB 30-60 FM",
        days_to_first_due=30,
        gap_between_dues=30,
        number_of_dues=2,
        is_end_of_month=True,
        active=True,
    )
    condition = payment_condition_to_domain(orm_condition)
    assert condition.name == "RB 30-60 FM"
    assert condition.terms == PaymentTerms(30, 30, 2, True)


class TestDocumentMapper:
    """Tests for Document mapper."""

    def _document(self):
        return ORMDocument(
            id=7,
            organization_id=1,
            document_type_id=1,
            category="INVOICE",
            numerator_code="FAT",
            number="000001",
            date=date(2024, 1, 15),
            main_warehouse_id=None,
            payment_condition_id=None,
            notes=None,
            net_total=Decimal("20.00"),
            vat_total=Decimal("4.40"),
            gross_total=Decimal("24.40"),
            created_at=datetime.now(UTC),
            lines=[
                ORMDocumentLine(
                    id=1,
                    document_id=7,
                    line_number=1,
                    product_id=None,
                    product_code="",
                    description="Riga",
                    quantity=Decimal("2.0000"),
                    unit_price=Decimal("10.00"),
                    vat_rate=Decimal("0.2200"),
                    net_amount=Decimal("20.00"),
                    vat_amount=Decimal("4.40"),
                    gross_amount=Decimal("24.40"),
                )
            ],
            deadlines=[
                ORMPaymentDeadline(
                    id=1,
                    document_id=7,
                    installment_number=1,
                    due_date=date(2024, 2, 14),
                    amount=Decimal("24.40"),
                )
            ],
        )

    def test_document_to_domain(self):
        """Test converting a document with its children."""
        document = document_to_domain(self._document())

        assert isinstance(document, Document)
        assert document.category == DocumentCategory.INVOICE
        assert document.number == "000001"
        assert len(document.lines) == 1
        assert document.lines[0].description == "Riga"
        assert document.deadlines[0].due_date == date(2024, 2, 14)

    def test_header_only(self):
        document = document_to_domain(self._document(), include_children=False)
        assert document.lines == ()
        assert document.deadlines == ()
        assert document.gross_total == Decimal("24.40")


def test_stock_movement_to_domain():
    orm_movement = ORMStockMovement(
        id=1,
        organization_id=1,
        product_id=5,
        warehouse_id=2,
        quantity=Decimal("-3.0000"),
        movement_type="SCARICO_VENDITA",
        document_type_id=1,
        document_id=7,
        document_number="000001",
        line_number=1,
        created_at=datetime.now(UTC),
    )
    movement = stock_movement_to_domain(orm_movement)
    assert movement.movement_type == MovementType.SCARICO_VENDITA
    assert movement.quantity == Decimal("-3")
