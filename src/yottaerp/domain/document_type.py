"""Document type configuration domain service."""

from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import DocumentTypeConfig as DocumentTypeEntity
from yottaerp.domain.errors import (
    ConflictError,
    DocumentTypeNotFound,
    ValidationError,
    duplicate_code,
)
from yottaerp.domain.tenant import TenantContext, require_document_type

VALID_SIGNS = (1, -1, None)

# code, description, numerator, inventory movement, valuation impact, stock sign, valuation sign
STANDARD_DOCUMENT_TYPES = [
    ("PRO", "Preventivo", "PRO", False, False, None, None),
    ("ORD", "Ordine", "ORD", False, False, None, None),
    ("DDT", "DDT Vendita", "DDT", True, False, -1, None),
    ("FAI", "Fattura Immediata", "FAT", True, True, -1, 1),
    ("FAD", "Fattura Differita", "FAT", False, True, None, 1),
    ("NDC", "Nota di Credito", "FAT", True, True, 1, -1),
    ("OF", "Carico da Fornitore", "OF", True, False, 1, None),
]


class DocumentTypeService:
    """Service for managing document type configurations."""

    def __init__(self, db: Database, tenant: TenantContext):
        """Initialize document type service.

        Args:
            db: Database instance
            tenant: Organization the service acts for
        """
        self.db = db
        self.tenant = tenant

    def create_document_type(
        self,
        code: str,
        description: str,
        numerator_code: Optional[str] = None,
        active: bool = True,
        inventory_movement: bool = False,
        valuation_impact: bool = False,
        operation_sign_stock: Optional[int] = None,
        operation_sign_valuation: Optional[int] = None,
    ) -> int:
        """Create a document type.

        Args:
            code: Type code (e.g., "FAI")
            description: Description (e.g., "Fattura Immediata")
            numerator_code: Numbering series; types sharing it share numbers.
                Defaults to the code.
            active: Whether new documents may use this type
            inventory_movement: Whether documents of this type move stock
            valuation_impact: Whether documents of this type affect valuation
            operation_sign_stock: +1 (load) or -1 (unload)
            operation_sign_valuation: +1 or -1

        Returns:
            Document type ID

        Raises:
            ValidationError: If a sign is invalid or a flag has no sign
            ConflictError: If code already exists
        """
        code = code.strip().upper()
        if not code:
            raise ValidationError("Document type code cannot be empty")
        if operation_sign_stock not in VALID_SIGNS or operation_sign_valuation not in VALID_SIGNS:
            raise ValidationError("Operation signs must be +1, -1 or empty")
        if inventory_movement and operation_sign_stock is None:
            raise ValidationError(
                f"Document type {code} moves inventory and needs a stock operation sign"
            )
        if valuation_impact and operation_sign_valuation is None:
            raise ValidationError(
                f"Document type {code} affects valuation and needs a valuation operation sign"
            )
        if self.db.get_document_type_by_code(self.tenant.organization_id, code) is not None:
            raise ConflictError(duplicate_code("Document type", code))

        return self.db.create_document_type(
            organization_id=self.tenant.organization_id,
            code=code,
            description=description,
            numerator_code=(numerator_code or code).strip().upper(),
            active=active,
            inventory_movement=inventory_movement,
            valuation_impact=valuation_impact,
            operation_sign_stock=operation_sign_stock,
            operation_sign_valuation=operation_sign_valuation,
        )

    def seed_standard_types(self) -> list[int]:
        """Create the standard Italian document types that are missing.

        Returns:
            IDs of the types created
        """
        created = []
        for code, description, numerator, inventory, valuation, sign_stock, sign_value in (
            STANDARD_DOCUMENT_TYPES
        ):
            if self.db.get_document_type_by_code(self.tenant.organization_id, code) is not None:
                continue
            created.append(
                self.create_document_type(
                    code=code,
                    description=description,
                    numerator_code=numerator,
                    inventory_movement=inventory,
                    valuation_impact=valuation,
                    operation_sign_stock=sign_stock,
                    operation_sign_valuation=sign_value,
                )
            )
        return created

    def get_document_type(self, document_type_id: int) -> DocumentTypeEntity:
        """Get a document type of the organization."""
        return require_document_type(self.db, self.tenant, document_type_id)

    def list_document_types(self) -> list[DocumentTypeEntity]:
        """List document types of the organization."""
        return self.db.list_document_types(self.tenant.organization_id)

    def resolve_document_type(self, document_type: str | int) -> DocumentTypeEntity:
        """Resolve a document type code or ID."""
        if isinstance(document_type, int) or document_type.isdigit():
            return self.get_document_type(int(document_type))

        found = self.db.get_document_type_by_code(
            self.tenant.organization_id, document_type.upper()
        )
        if found is None:
            raise DocumentTypeNotFound(f"Document type '{document_type}' not found")
        return found
