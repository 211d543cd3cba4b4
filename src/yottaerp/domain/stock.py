"""Stock domain service.

Stock is never stored: the quantity on hand is the algebraic sum of the
stock movements of a product, optionally restricted to one warehouse.
"""

from decimal import Decimal
from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import StockMovement as StockMovementEntity
from yottaerp.domain.tenant import TenantContext, optional_warehouse, require_product
from yottaerp.utils.decimal_utils import ZERO


class StockService:
    """Service for reading calculated stock."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize stock service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def get_stock(self, product_id: int, warehouse_id: Optional[int] = None) -> Decimal:
        """Get the quantity on hand of a product.

        Args:
            product_id: Product ID
            warehouse_id: Optional warehouse; all warehouses when None

        Returns:
            Sum of movement quantities (0 when there are none)
        """
        require_product(self.db, self.tenant, product_id)
        optional_warehouse(self.db, self.tenant, warehouse_id)
        totals = self.db.get_stock_totals(
            self.tenant.organization_id, [product_id], warehouse_id=warehouse_id
        )
        return totals.get(product_id, ZERO)

    def get_stocks(
        self, product_ids: list[int], warehouse_id: Optional[int] = None
    ) -> dict[int, Decimal]:
        """Get the quantity on hand of several products.

        Every requested product appears in the result, with 0 when it has no
        movements.
        """
        optional_warehouse(self.db, self.tenant, warehouse_id)
        totals = self.db.get_stock_totals(
            self.tenant.organization_id, list(product_ids), warehouse_id=warehouse_id
        )
        return {product_id: totals.get(product_id, ZERO) for product_id in product_ids}

    def list_movements(
        self,
        product_id: Optional[int] = None,
        warehouse_id: Optional[int] = None,
        document_id: Optional[int] = None,
    ) -> list[StockMovementEntity]:
        """List stock movements of the organization."""
        return self.db.list_stock_movements(
            self.tenant.organization_id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            document_id=document_id,
        )
