"""Shared pytest fixtures for yottaerp tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from yottaerp.database.factories import create_sqlite_database
from yottaerp.domain.document import DocumentService
from yottaerp.domain.document_type import DocumentTypeService
from yottaerp.domain.organization import OrganizationService
from yottaerp.domain.payment_condition import PaymentConditionService
from yottaerp.domain.product import ProductService
from yottaerp.domain.stock import StockService
from yottaerp.domain.tenant import TenantContext
from yottaerp.domain.warehouse import WarehouseService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def organization_service(temp_db):
    """Create an OrganizationService with a temporary database."""
    return OrganizationService(temp_db)


@pytest.fixture
def organization(organization_service):
    """Create the organization most tests act for."""
    org_id = organization_service.create_organization(code="ACME", name="Acme S.r.l.")
    return organization_service.get_organization(org_id)


@pytest.fixture
def other_organization(organization_service):
    """Create a second organization for tenant isolation tests."""
    org_id = organization_service.create_organization(code="BETA", name="Beta S.p.A.")
    return organization_service.get_organization(org_id)


@pytest.fixture
def tenant(organization):
    """Tenant context of the sample organization."""
    return TenantContext(organization.id)


@pytest.fixture
def other_tenant(other_organization):
    """Tenant context of the second organization."""
    return TenantContext(other_organization.id)


@pytest.fixture
def warehouse_service(temp_db, tenant):
    return WarehouseService(temp_db, tenant)


@pytest.fixture
def product_service(temp_db, tenant):
    return ProductService(temp_db, tenant)


@pytest.fixture
def document_type_service(temp_db, tenant):
    return DocumentTypeService(temp_db, tenant)


@pytest.fixture
def payment_condition_service(temp_db, tenant):
    return PaymentConditionService(temp_db, tenant)


@pytest.fixture
def document_service(temp_db, tenant):
    return DocumentService(temp_db, tenant)


@pytest.fixture
def stock_service(temp_db, tenant):
    return StockService(temp_db, tenant)


@pytest.fixture
def warehouses(warehouse_service):
    """Create two warehouses and return their IDs by code."""
    return {
        "MAG1": warehouse_service.create_warehouse(code="MAG1", name="Magazzino Centrale"),
        "MAG2": warehouse_service.create_warehouse(code="MAG2", name="Magazzino Nord"),
    }


@pytest.fixture
def product_types(product_service):
    """Create a stock-managed and a service product type."""
    return {
        "MERCE": product_service.create_product_type("MERCE", "Merce", manage_stock=True),
        "SERVIZIO": product_service.create_product_type(
            "SERVIZIO", "Servizi", manage_stock=False
        ),
    }


@pytest.fixture
def sample_products(product_service, product_types, warehouses):
    """Create sample products and return them by code.

    VITE-M8 and DADO-M8 manage stock (DADO-M8 defaults to MAG2), CONSULENZA
    is a service.
    """
    vite_id = product_service.create_product(
        code="VITE-M8",
        name="Vite M8",
        price=Decimal("10.00"),
        vat_rate=Decimal("0.22"),
        product_type_id=product_types["MERCE"],
    )
    dado_id = product_service.create_product(
        code="DADO-M8",
        name="Dado M8",
        price=Decimal("0.50"),
        vat_rate=Decimal("0.22"),
        product_type_id=product_types["MERCE"],
        default_warehouse_id=warehouses["MAG2"],
    )
    consulenza_id = product_service.create_product(
        code="CONSULENZA",
        name="Consulenza tecnica",
        price=Decimal("150.00"),
        vat_rate=Decimal("0.22"),
        product_type_id=product_types["SERVIZIO"],
    )
    return {
        "VITE-M8": product_service.get_product(vite_id),
        "DADO-M8": product_service.get_product(dado_id),
        "CONSULENZA": product_service.get_product(consulenza_id),
    }


@pytest.fixture
def document_types(document_type_service):
    """Seed the standard document types and return them by code."""
    document_type_service.seed_standard_types()
    return {t.code: t for t in document_type_service.list_document_types()}


@pytest.fixture
def payment_conditions(payment_condition_service):
    """Create sample payment conditions and return their IDs by name."""
    return {
        "RD": payment_condition_service.create_payment_condition("RD"),
        "RB 30-60": payment_condition_service.create_payment_condition(
            "RB 30-60", days_to_first_due=30, gap_between_dues=30, number_of_dues=2
        ),
        "RB 30-60 FM": payment_condition_service.create_payment_condition(
            "RB 30-60 FM",
            days_to_first_due=30,
            gap_between_dues=30,
            number_of_dues=2,
            is_end_of_month=True,
        ),
    }


@pytest.fixture
def invoice_date():
    return date(2024, 1, 15)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, temp_db, organization):
    """Invoke the CLI against the temporary database as the sample organization."""
    from yottaerp.cli.main import cli

    def run(*args, org=None, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--org", org or organization.code, *args],
            input=input,
        )

    return run
