"""Domain model entities for yottaerp.

These are pure data classes representing business concepts, independent of
database schema. Persistent entities mirror stored rows; the transient ones
(line inputs, computed totals, deadlines and stock movement intents) only
live for the duration of a document computation.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class DocumentCategory(str, Enum):
    """Fiscal category of a document, derived from its type code."""

    QUOTE = "QUOTE"
    ORDER = "ORDER"
    DELIVERY_NOTE = "DELIVERY_NOTE"
    INVOICE = "INVOICE"
    CREDIT_NOTE = "CREDIT_NOTE"


class MovementType(str, Enum):
    """Kind of stock movement generated by a document line."""

    CARICO_FORNITORE = "CARICO_FORNITORE"
    RESO_CLIENTE = "RESO_CLIENTE"
    SCARICO_DDT = "SCARICO_DDT"
    SCARICO_VENDITA = "SCARICO_VENDITA"
    RESO_FORNITORE = "RESO_FORNITORE"


@dataclass(frozen=True)
class Organization:
    """Tenant domain entity."""

    id: int
    code: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Warehouse:
    """Warehouse domain entity."""

    id: int
    organization_id: int
    code: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class ProductType:
    """Product type (category) domain entity."""

    id: int
    organization_id: int
    code: str
    description: str
    manage_stock: bool


@dataclass(frozen=True)
class Product:
    """Product domain entity.

    ``manage_stock`` is taken from the product type; products without a type
    are never stock managed.
    """

    id: int
    organization_id: int
    code: str
    name: str
    description: Optional[str]
    price: Decimal
    vat_rate: Decimal
    product_type_id: Optional[int]
    default_warehouse_id: Optional[int]
    manage_stock: bool = False


@dataclass(frozen=True)
class DocumentTypeConfig:
    """Document type configuration domain entity."""

    id: int
    organization_id: int
    code: str
    description: str
    numerator_code: str
    active: bool = True
    inventory_movement: bool = False
    valuation_impact: bool = False
    operation_sign_stock: Optional[int] = None
    operation_sign_valuation: Optional[int] = None


@dataclass(frozen=True)
class PaymentTerms:
    """The scheduling parameters of a payment condition."""

    days_to_first_due: int
    gap_between_dues: int
    number_of_dues: int
    is_end_of_month: bool = False


@dataclass(frozen=True)
class PaymentCondition:
    """Payment condition domain entity."""

    id: int
    organization_id: int
    name: str
    days_to_first_due: int
    gap_between_dues: int
    number_of_dues: int
    is_end_of_month: bool = False
    active: bool = True

    @property
    def terms(self) -> PaymentTerms:
        return PaymentTerms(
            days_to_first_due=self.days_to_first_due,
            gap_between_dues=self.gap_between_dues,
            number_of_dues=self.number_of_dues,
            is_end_of_month=self.is_end_of_month,
        )


@dataclass(frozen=True)
class DocumentLine:
    """Persisted document line domain entity."""

    id: int
    document_id: int
    line_number: int
    product_id: Optional[int]
    product_code: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal
    net_amount: Decimal
    vat_amount: Decimal
    gross_amount: Decimal


@dataclass(frozen=True)
class PaymentDeadline:
    """Persisted installment of a document."""

    id: int
    document_id: int
    installment_number: int
    due_date: date
    amount: Decimal


@dataclass(frozen=True)
class Document:
    """Document header domain entity."""

    id: int
    organization_id: int
    document_type_id: int
    category: DocumentCategory
    number: str
    date: date
    main_warehouse_id: Optional[int]
    payment_condition_id: Optional[int]
    notes: Optional[str]
    net_total: Decimal
    vat_total: Decimal
    gross_total: Decimal
    created_at: datetime
    lines: tuple[DocumentLine, ...] = ()
    deadlines: tuple[PaymentDeadline, ...] = ()


@dataclass(frozen=True)
class StockMovement:
    """Stock movement domain entity. Quantity is signed."""

    id: int
    organization_id: int
    product_id: int
    warehouse_id: int
    quantity: Decimal
    movement_type: MovementType
    document_type_id: Optional[int]
    document_id: Optional[int]
    document_number: Optional[str]
    line_number: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class LineInput:
    """A document line as supplied by the caller, before pricing."""

    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal
    product_code: str = ""
    description: str = ""
    product_id: Optional[int] = None
    warehouse_id: Optional[int] = None


@dataclass(frozen=True)
class LineTotals:
    """Net, VAT and gross amounts of a single line."""

    net_amount: Decimal
    vat_amount: Decimal
    gross_amount: Decimal


@dataclass(frozen=True)
class VATBreakdown:
    """Result of extracting VAT from a VAT-inclusive amount."""

    net: Decimal
    vat: Decimal


@dataclass(frozen=True)
class CalculatedDeadline:
    """One installment produced by the deadline calculator."""

    due_date: date
    amount: Decimal
    installment_number: int


@dataclass(frozen=True)
class ComputedLine:
    """A priced line ready to be persisted."""

    line_number: int
    product_id: Optional[int]
    product_code: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal
    totals: LineTotals
    warehouse_id: Optional[int]


@dataclass(frozen=True)
class StockMovementIntent:
    """A stock movement to be written when the document is persisted."""

    line_number: int
    product_id: int
    warehouse_id: int
    quantity: Decimal
    movement_type: MovementType


@dataclass(frozen=True)
class DocumentContext:
    """Document-level inputs of a totals computation."""

    document_type: DocumentTypeConfig
    document_date: date
    main_warehouse_id: Optional[int] = None
    payment_condition: Optional[PaymentCondition | PaymentTerms] = None


@dataclass(frozen=True)
class DocumentComputation:
    """Everything a document create or update has to persist."""

    lines: list[ComputedLine]
    net_total: Decimal
    vat_total: Decimal
    gross_total: Decimal
    deadlines: list[CalculatedDeadline] = field(default_factory=list)
    stock_movements: list[StockMovementIntent] = field(default_factory=list)
