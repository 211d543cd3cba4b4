"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from yottaerp.domain.entities import (
    Organization,
    Warehouse,
    ProductType,
    Product,
    DocumentTypeConfig,
    PaymentCondition,
    Document,
    PaymentDeadline,
    StockMovement,
)


class Database(ABC):
    """Abstract database interface for yottaerp.

    Lookups by ID are not tenant scoped: they return the record whatever its
    organization, and the domain layer verifies ownership. Listing
    operations always take the organization to list for.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Run the enclosed writes atomically.

        Writes inside the block are committed together when it exits and
        rolled back if it raises. Nested blocks join the outer transaction.
        """
        pass

    # Organization operations
    @abstractmethod
    def create_organization(self, code: str, name: str) -> int:
        """Create an organization. Returns organization ID."""
        pass

    @abstractmethod
    def get_organization(self, organization_id: int) -> Optional[Organization]:
        """Get organization by ID."""
        pass

    @abstractmethod
    def get_organization_by_code(self, code: str) -> Optional[Organization]:
        """Get organization by code."""
        pass

    @abstractmethod
    def list_organizations(self) -> list[Organization]:
        """List all organizations."""
        pass

    # Warehouse operations
    @abstractmethod
    def create_warehouse(self, organization_id: int, code: str, name: str) -> int:
        """Create a warehouse. Returns warehouse ID."""
        pass

    @abstractmethod
    def get_warehouse(self, warehouse_id: int) -> Optional[Warehouse]:
        """Get warehouse by ID."""
        pass

    @abstractmethod
    def get_warehouse_by_code(self, organization_id: int, code: str) -> Optional[Warehouse]:
        """Get warehouse by code within an organization."""
        pass

    @abstractmethod
    def list_warehouses(self, organization_id: int) -> list[Warehouse]:
        """List warehouses of an organization."""
        pass

    # Product type operations
    @abstractmethod
    def create_product_type(
        self, organization_id: int, code: str, description: str, manage_stock: bool = True
    ) -> int:
        """Create a product type. Returns product type ID."""
        pass

    @abstractmethod
    def get_product_type(self, product_type_id: int) -> Optional[ProductType]:
        """Get product type by ID."""
        pass

    @abstractmethod
    def get_product_type_by_code(self, organization_id: int, code: str) -> Optional[ProductType]:
        """Get product type by code within an organization."""
        pass

    @abstractmethod
    def list_product_types(self, organization_id: int) -> list[ProductType]:
        """List product types of an organization."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        organization_id: int,
        code: str,
        name: str,
        price: Decimal,
        vat_rate: Decimal,
        description: Optional[str] = None,
        product_type_id: Optional[int] = None,
        default_warehouse_id: Optional[int] = None,
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def get_product_by_code(self, organization_id: int, code: str) -> Optional[Product]:
        """Get product by code within an organization."""
        pass

    @abstractmethod
    def list_products(self, organization_id: int) -> list[Product]:
        """List products of an organization."""
        pass

    # Document type operations
    @abstractmethod
    def create_document_type(
        self,
        organization_id: int,
        code: str,
        description: str,
        numerator_code: str,
        active: bool = True,
        inventory_movement: bool = False,
        valuation_impact: bool = False,
        operation_sign_stock: Optional[int] = None,
        operation_sign_valuation: Optional[int] = None,
    ) -> int:
        """Create a document type configuration. Returns its ID."""
        pass

    @abstractmethod
    def get_document_type(self, document_type_id: int) -> Optional[DocumentTypeConfig]:
        """Get document type by ID."""
        pass

    @abstractmethod
    def get_document_type_by_code(
        self, organization_id: int, code: str
    ) -> Optional[DocumentTypeConfig]:
        """Get document type by code within an organization."""
        pass

    @abstractmethod
    def list_document_types(self, organization_id: int) -> list[DocumentTypeConfig]:
        """List document types of an organization."""
        pass

    # Payment condition operations
    @abstractmethod
    def create_payment_condition(
        self,
        organization_id: int,
        name: str,
        days_to_first_due: int,
        gap_between_dues: int,
        number_of_dues: int,
        is_end_of_month: bool = False,
        active: bool = True,
    ) -> int:
        """Create a payment condition. Returns its ID."""
        pass

    @abstractmethod
    def get_payment_condition(self, payment_condition_id: int) -> Optional[PaymentCondition]:
        """Get payment condition by ID."""
        pass

    @abstractmethod
    def get_payment_condition_by_name(
        self, organization_id: int, name: str
    ) -> Optional[PaymentCondition]:
        """Get payment condition by name within an organization."""
        pass

    @abstractmethod
    def list_payment_conditions(
        self, organization_id: int, active_only: bool = False
    ) -> list[PaymentCondition]:
        """List payment conditions of an organization."""
        pass

    # Document operations
    @abstractmethod
    def create_document(
        self,
        organization_id: int,
        document_type_id: int,
        category: str,
        numerator_code: str,
        number: str,
        date: date,
        net_total: Decimal,
        vat_total: Decimal,
        gross_total: Decimal,
        main_warehouse_id: Optional[int] = None,
        payment_condition_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a document header. Returns document ID.

        Raises:
            ConflictError: If the number is already used in the series
        """
        pass

    @abstractmethod
    def update_document_header(self, document_id: int, **fields: Any) -> None:
        """Update document header columns (date, warehouse, condition, notes, totals)."""
        pass

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        """Get document by ID, with lines and deadlines."""
        pass

    @abstractmethod
    def list_documents(
        self,
        organization_id: int,
        document_type_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Document]:
        """List document headers of an organization, newest first."""
        pass

    @abstractmethod
    def delete_document(self, document_id: int) -> None:
        """Delete a document with its lines and deadlines."""
        pass

    @abstractmethod
    def list_document_numbers(self, organization_id: int, numerator_code: str) -> list[str]:
        """List numbers used in a numbering series of an organization."""
        pass

    # Document line operations
    @abstractmethod
    def add_document_line(
        self,
        document_id: int,
        line_number: int,
        product_id: Optional[int],
        product_code: str,
        description: str,
        quantity: Decimal,
        unit_price: Decimal,
        vat_rate: Decimal,
        net_amount: Decimal,
        vat_amount: Decimal,
        gross_amount: Decimal,
    ) -> int:
        """Add a line to a document. Returns line ID."""
        pass

    @abstractmethod
    def delete_document_lines(self, document_id: int) -> int:
        """Delete all lines of a document. Returns the number deleted."""
        pass

    # Payment deadline operations
    @abstractmethod
    def add_payment_deadline(
        self, document_id: int, installment_number: int, due_date: date, amount: Decimal
    ) -> int:
        """Add an installment to a document. Returns deadline ID."""
        pass

    @abstractmethod
    def delete_payment_deadlines(self, document_id: int) -> int:
        """Delete all installments of a document. Returns the number deleted."""
        pass

    @abstractmethod
    def list_payment_deadlines(
        self,
        organization_id: int,
        document_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[PaymentDeadline]:
        """List installments of an organization ordered by due date."""
        pass

    # Stock movement operations
    @abstractmethod
    def create_stock_movement(
        self,
        organization_id: int,
        product_id: int,
        warehouse_id: int,
        quantity: Decimal,
        movement_type: str,
        document_type_id: Optional[int] = None,
        document_id: Optional[int] = None,
        document_number: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> int:
        """Create a stock movement. Returns movement ID."""
        pass

    @abstractmethod
    def delete_document_stock_movements(self, document_id: int) -> int:
        """Delete the stock movements of a document. Returns the number deleted."""
        pass

    @abstractmethod
    def list_stock_movements(
        self,
        organization_id: int,
        product_id: Optional[int] = None,
        warehouse_id: Optional[int] = None,
        document_id: Optional[int] = None,
    ) -> list[StockMovement]:
        """List stock movements with optional filters."""
        pass

    @abstractmethod
    def get_stock_totals(
        self,
        organization_id: int,
        product_ids: list[int],
        warehouse_id: Optional[int] = None,
    ) -> dict[int, Decimal]:
        """Sum movement quantities per product.

        Products without movements are absent from the result.
        """
        pass
