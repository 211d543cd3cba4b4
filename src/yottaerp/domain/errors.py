"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class CrossTenantAccessDenied(DomainError):
    """A referenced record belongs to another organization."""


class InvalidNumericFormat(ValidationError):
    """Malformed decimal input."""


class InvalidAmount(ValidationError):
    """Amount to schedule is not strictly positive."""


class InvalidInstallmentCount(ValidationError):
    """Payment condition asks for fewer than one installment."""


class OrganizationNotFound(NotFoundError):
    pass


class WarehouseNotFound(NotFoundError):
    pass


class ProductTypeNotFound(NotFoundError):
    pass


class ProductNotFound(NotFoundError):
    pass


class DocumentTypeNotFound(NotFoundError):
    pass


class PaymentConditionNotFound(NotFoundError):
    pass


class DocumentNotFound(NotFoundError):
    pass


def invalid_numeric_format(value: object) -> str:
    """Return message for a value that is not a decimal number."""
    return f"Invalid numeric format: '{value}'"


def entity_not_found(kind: str, entity_id: int) -> str:
    """Return message for a missing record of the given kind."""
    return f"{kind} {entity_id} not found"


def cross_tenant_access(kind: str, entity_id: int) -> str:
    """Return message for a record owned by another organization."""
    return f"Access denied: {kind.lower()} {entity_id} belongs to another organization"


def duplicate_code(kind: str, code: str) -> str:
    """Return message for a duplicate code within an organization."""
    return f"{kind} with code '{code}' already exists"


def duplicate_document_number(number: str, numerator_code: str) -> str:
    """Return message for a number already used in a numbering series."""
    return f"Document number {number} already exists in series '{numerator_code}'"


def missing_stock_sign(document_type_code: str) -> str:
    """Return message for a stock-moving document type without a sign."""
    return (
        f"Document type {document_type_code} moves inventory "
        "but has no stock operation sign"
    )
