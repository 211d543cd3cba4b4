"""Organization domain service."""

from typing import Optional
from yottaerp.database.base import Database
from yottaerp.domain.entities import Organization as OrganizationEntity
from yottaerp.domain.errors import (
    ConflictError,
    OrganizationNotFound,
    ValidationError,
    duplicate_code,
    entity_not_found,
)


class OrganizationService:
    """Service for managing organizations (tenants)."""

    def __init__(self, db: Database):
        """Initialize organization service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_organization(self, code: str, name: str) -> int:
        """Create a new organization.

        Args:
            code: Short unique code
            name: Business name

        Returns:
            Organization ID

        Raises:
            ValidationError: If code is empty
            ConflictError: If code already exists
        """
        code = code.strip()
        if not code:
            raise ValidationError("Organization code cannot be empty")
        if self.db.get_organization_by_code(code) is not None:
            raise ConflictError(duplicate_code("Organization", code))

        return self.db.create_organization(code=code, name=name)

    def get_organization(self, organization_id: int) -> Optional[OrganizationEntity]:
        """Get organization by ID."""
        return self.db.get_organization(organization_id)

    def require_organization(self, organization_id: int) -> OrganizationEntity:
        """Get organization by ID or raise OrganizationNotFound."""
        org = self.db.get_organization(organization_id)
        if org is None:
            raise OrganizationNotFound(entity_not_found("Organization", organization_id))
        return org

    def list_organizations(self) -> list[OrganizationEntity]:
        """List all organizations."""
        return self.db.list_organizations()

    def resolve_organization(self, organization: str | int) -> OrganizationEntity:
        """Resolve an organization code or ID.

        Numeric strings are treated as IDs first, then as codes.

        Raises:
            OrganizationNotFound: If nothing matches
        """
        if isinstance(organization, int):
            return self.require_organization(organization)

        if organization.isdigit():
            org = self.db.get_organization(int(organization))
            if org is not None:
                return org

        org = self.db.get_organization_by_code(organization)
        if org is None:
            raise OrganizationNotFound(f"Organization '{organization}' not found")
        return org
