"""Tests for tenant scoping helpers."""

import pytest

from yottaerp.domain.errors import (
    CrossTenantAccessDenied,
    DocumentNotFound,
    PaymentConditionNotFound,
    WarehouseNotFound,
)
from yottaerp.domain.tenant import (
    TenantContext,
    optional_warehouse,
    require_document,
    require_payment_condition,
    require_product,
    require_warehouse,
)


def test_require_own_records(temp_db, tenant, warehouses, sample_products):
    assert require_warehouse(temp_db, tenant, warehouses["MAG1"]).code == "MAG1"
    assert require_product(temp_db, tenant, sample_products["VITE-M8"].id).code == "VITE-M8"


def test_missing_records(temp_db, tenant):
    with pytest.raises(WarehouseNotFound, match="Warehouse 99 not found"):
        require_warehouse(temp_db, tenant, 99)
    with pytest.raises(PaymentConditionNotFound):
        require_payment_condition(temp_db, tenant, 99)
    with pytest.raises(DocumentNotFound):
        require_document(temp_db, tenant, 99)


def test_other_organization_is_denied(temp_db, other_tenant, warehouses):
    with pytest.raises(CrossTenantAccessDenied) as excinfo:
        require_warehouse(temp_db, other_tenant, warehouses["MAG1"])
    assert "belongs to another organization" in str(excinfo.value)


def test_optional_warehouse(temp_db, tenant, warehouses):
    assert optional_warehouse(temp_db, tenant, None) is None
    assert optional_warehouse(temp_db, tenant, warehouses["MAG2"]).code == "MAG2"


def test_cross_tenant_error_is_a_value_error(temp_db, other_tenant, warehouses):
    with pytest.raises(ValueError):
        require_warehouse(temp_db, other_tenant, warehouses["MAG1"])


def test_tenant_context_is_immutable():
    tenant = TenantContext(1)
    with pytest.raises(Exception):
        tenant.organization_id = 2
    assert tenant == TenantContext(1)
