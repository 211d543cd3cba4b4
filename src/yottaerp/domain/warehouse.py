"""Warehouse domain service."""

from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import Warehouse as WarehouseEntity
from yottaerp.domain.errors import (
    ConflictError,
    ValidationError,
    WarehouseNotFound,
    duplicate_code,
)
from yottaerp.domain.tenant import TenantContext, require_warehouse


class WarehouseService:
    """Service for managing the warehouses of an organization."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize warehouse service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def create_warehouse(self, code: str, name: str) -> int:
        """Create a warehouse.

        Raises:
            ValidationError: If code is empty
            ConflictError: If code already exists in the organization
        """
        code = code.strip()
        if not code:
            raise ValidationError("Warehouse code cannot be empty")
        if self.db.get_warehouse_by_code(self.tenant.organization_id, code) is not None:
            raise ConflictError(duplicate_code("Warehouse", code))

        return self.db.create_warehouse(
            organization_id=self.tenant.organization_id, code=code, name=name
        )

    def get_warehouse(self, warehouse_id: int) -> WarehouseEntity:
        """Get a warehouse of the organization.

        Raises:
            WarehouseNotFound: If the warehouse does not exist
            CrossTenantAccessDenied: If it belongs to another organization
        """
        return require_warehouse(self.db, self.tenant, warehouse_id)

    def list_warehouses(self) -> list[WarehouseEntity]:
        """List warehouses of the organization."""
        return self.db.list_warehouses(self.tenant.organization_id)

    def resolve_warehouse(self, warehouse: Optional[str | int]) -> Optional[int]:
        """Resolve a warehouse code or ID to an ID; None passes through."""
        if warehouse is None or warehouse == "":
            return None
        if isinstance(warehouse, int) or warehouse.isdigit():
            return self.get_warehouse(int(warehouse)).id

        found = self.db.get_warehouse_by_code(self.tenant.organization_id, warehouse)
        if found is None:
            raise WarehouseNotFound(f"Warehouse '{warehouse}' not found")
        return found.id
