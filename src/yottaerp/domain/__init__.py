"""Domain layer for yottaerp application."""

# Services are imported lazily: utils and database import entities and errors
# from this package, and the services import utils and database.
_SERVICES = {
    "OrganizationService": "yottaerp.domain.organization",
    "WarehouseService": "yottaerp.domain.warehouse",
    "ProductService": "yottaerp.domain.product",
    "DocumentTypeService": "yottaerp.domain.document_type",
    "PaymentConditionService": "yottaerp.domain.payment_condition",
    "DocumentService": "yottaerp.domain.document",
    "StockService": "yottaerp.domain.stock",
    "TenantContext": "yottaerp.domain.tenant",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
