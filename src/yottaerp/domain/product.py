"""Product and product type domain service."""

from decimal import Decimal
from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import (
    Product as ProductEntity,
    ProductType as ProductTypeEntity,
)
from yottaerp.domain.errors import (
    ConflictError,
    ProductNotFound,
    ProductTypeNotFound,
    ValidationError,
    duplicate_code,
)
from yottaerp.domain.tenant import (
    TenantContext,
    optional_warehouse,
    require_product,
    require_product_type,
)
from yottaerp.utils.decimal_utils import ONE, ZERO, round2, round4, to_decimal


class ProductService:
    """Service for managing products and product types of an organization."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize product service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def create_product_type(
        self, code: str, description: str, manage_stock: bool = True
    ) -> int:
        """Create a product type.

        Args:
            code: Type code (e.g., "MERCE", "SERVIZIO")
            description: Human readable description
            manage_stock: Whether products of this type move stock

        Returns:
            Product type ID

        Raises:
            ConflictError: If code already exists in the organization
        """
        code = code.strip()
        if not code:
            raise ValidationError("Product type code cannot be empty")
        if self.db.get_product_type_by_code(self.tenant.organization_id, code) is not None:
            raise ConflictError(duplicate_code("Product type", code))

        return self.db.create_product_type(
            organization_id=self.tenant.organization_id,
            code=code,
            description=description,
            manage_stock=manage_stock,
        )

    def list_product_types(self) -> list[ProductTypeEntity]:
        """List product types of the organization."""
        return self.db.list_product_types(self.tenant.organization_id)

    def resolve_product_type(self, product_type: Optional[str | int]) -> Optional[int]:
        """Resolve a product type code or ID to an ID; None passes through."""
        if product_type is None or product_type == "":
            return None
        if isinstance(product_type, int) or product_type.isdigit():
            return require_product_type(self.db, self.tenant, int(product_type)).id

        found = self.db.get_product_type_by_code(self.tenant.organization_id, product_type)
        if found is None:
            raise ProductTypeNotFound(f"Product type '{product_type}' not found")
        return found.id

    def create_product(
        self,
        code: str,
        name: str,
        price: Decimal | str,
        vat_rate: Decimal | str,
        description: Optional[str] = None,
        product_type_id: Optional[int] = None,
        default_warehouse_id: Optional[int] = None,
    ) -> int:
        """Create a product.

        Args:
            code: Product code, unique in the organization
            name: Product name
            price: Net list price
            vat_rate: VAT rate as a fraction (e.g., 0.22)
            description: Optional description
            product_type_id: Optional product type (decides stock management)
            default_warehouse_id: Optional default warehouse for stock movements

        Returns:
            Product ID

        Raises:
            ValidationError: If price is negative or VAT rate outside [0, 1]
            ConflictError: If code already exists
            ProductTypeNotFound, WarehouseNotFound: If a reference does not exist
            CrossTenantAccessDenied: If a reference belongs to another organization
        """
        code = code.strip()
        if not code:
            raise ValidationError("Product code cannot be empty")

        price = to_decimal(price)
        vat_rate = to_decimal(vat_rate)
        if price < ZERO:
            raise ValidationError("Product price cannot be negative")
        if vat_rate < ZERO or vat_rate > ONE:
            raise ValidationError(f"VAT rate must be a fraction between 0 and 1 (got {vat_rate})")

        if self.db.get_product_by_code(self.tenant.organization_id, code) is not None:
            raise ConflictError(duplicate_code("Product", code))

        if product_type_id is not None:
            require_product_type(self.db, self.tenant, product_type_id)
        optional_warehouse(self.db, self.tenant, default_warehouse_id)

        return self.db.create_product(
            organization_id=self.tenant.organization_id,
            code=code,
            name=name,
            price=round2(price),
            vat_rate=round4(vat_rate),
            description=description,
            product_type_id=product_type_id,
            default_warehouse_id=default_warehouse_id,
        )

    def get_product(self, product_id: int) -> ProductEntity:
        """Get a product of the organization.

        Raises:
            ProductNotFound: If the product does not exist
            CrossTenantAccessDenied: If it belongs to another organization
        """
        return require_product(self.db, self.tenant, product_id)

    def list_products(self) -> list[ProductEntity]:
        """List products of the organization."""
        return self.db.list_products(self.tenant.organization_id)

    def resolve_product(self, product: str | int) -> ProductEntity:
        """Resolve a product code or ID."""
        if isinstance(product, int) or product.isdigit():
            return self.get_product(int(product))

        found = self.db.get_product_by_code(self.tenant.organization_id, product)
        if found is None:
            raise ProductNotFound(f"Product '{product}' not found")
        return found
