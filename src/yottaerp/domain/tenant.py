"""Tenant scoping for record lookups.

Every record carries the ID of the organization that owns it. Lookups go
through the ``require_*`` helpers, which fail with the matching not-found
error when the record does not exist and with ``CrossTenantAccessDenied``
when it belongs to another organization.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from yottaerp.database.base import Database
from yottaerp.domain.entities import (
    DocumentTypeConfig,
    Document,
    PaymentCondition,
    Product,
    ProductType,
    Warehouse,
)
from yottaerp.domain.errors import (
    CrossTenantAccessDenied,
    DocumentNotFound,
    DocumentTypeNotFound,
    PaymentConditionNotFound,
    ProductNotFound,
    ProductTypeNotFound,
    WarehouseNotFound,
    cross_tenant_access,
    entity_not_found,
)


class OwnedRecord(Protocol):
    id: int
    organization_id: int


@dataclass(frozen=True)
class TenantContext:
    """The organization on whose behalf an operation runs."""

    organization_id: int

    def verify_access(self, record: OwnedRecord, kind: str = "Record") -> None:
        """Fail if the record belongs to another organization.

        Raises:
            CrossTenantAccessDenied: If the organizations differ
        """
        if record.organization_id != self.organization_id:
            raise CrossTenantAccessDenied(cross_tenant_access(kind, record.id))


def require_warehouse(db: Database, tenant: TenantContext, warehouse_id: int) -> Warehouse:
    """Fetch a warehouse of the tenant or fail."""
    warehouse = db.get_warehouse(warehouse_id)
    if warehouse is None:
        raise WarehouseNotFound(entity_not_found("Warehouse", warehouse_id))
    tenant.verify_access(warehouse, "Warehouse")
    return warehouse


def require_product_type(
    db: Database, tenant: TenantContext, product_type_id: int
) -> ProductType:
    """Fetch a product type of the tenant or fail."""
    product_type = db.get_product_type(product_type_id)
    if product_type is None:
        raise ProductTypeNotFound(entity_not_found("Product type", product_type_id))
    tenant.verify_access(product_type, "Product type")
    return product_type


def require_product(db: Database, tenant: TenantContext, product_id: int) -> Product:
    """Fetch a product of the tenant or fail."""
    product = db.get_product(product_id)
    if product is None:
        raise ProductNotFound(entity_not_found("Product", product_id))
    tenant.verify_access(product, "Product")
    return product


def require_document_type(
    db: Database, tenant: TenantContext, document_type_id: int
) -> DocumentTypeConfig:
    """Fetch a document type of the tenant or fail."""
    document_type = db.get_document_type(document_type_id)
    if document_type is None:
        raise DocumentTypeNotFound(entity_not_found("Document type", document_type_id))
    tenant.verify_access(document_type, "Document type")
    return document_type


def require_payment_condition(
    db: Database, tenant: TenantContext, payment_condition_id: int
) -> PaymentCondition:
    """Fetch a payment condition of the tenant or fail."""
    condition = db.get_payment_condition(payment_condition_id)
    if condition is None:
        raise PaymentConditionNotFound(
            entity_not_found("Payment condition", payment_condition_id)
        )
    tenant.verify_access(condition, "Payment condition")
    return condition


def require_document(db: Database, tenant: TenantContext, document_id: int) -> Document:
    """Fetch a document of the tenant or fail."""
    document = db.get_document(document_id)
    if document is None:
        raise DocumentNotFound(entity_not_found("Document", document_id))
    tenant.verify_access(document, "Document")
    return document


def optional_warehouse(
    db: Database, tenant: TenantContext, warehouse_id: Optional[int]
) -> Optional[Warehouse]:
    """Like require_warehouse, but None passes through."""
    if warehouse_id is None:
        return None
    return require_warehouse(db, tenant, warehouse_id)
