"""Document totals and stock cascade computation.

``compute_document`` is a pure function: it prices the lines, accumulates
the document totals, resolves the warehouse of every line, decides which
lines move stock and builds the payment schedule. Callers own the database
writes and run them in a single transaction.
"""

import logging
from typing import Mapping, Optional, Sequence

from yottaerp.domain.entities import (
    ComputedLine,
    DocumentCategory,
    DocumentComputation,
    DocumentContext,
    DocumentTypeConfig,
    LineInput,
    MovementType,
    Product,
    StockMovementIntent,
)
from yottaerp.domain.errors import (
    ProductNotFound,
    ValidationError,
    entity_not_found,
    missing_stock_sign,
)
from yottaerp.domain.payment_calculator import calculate_deadlines
from yottaerp.utils.decimal_utils import (
    MONEY_CONTEXT,
    ZERO,
    calculate_line_total,
    round2,
    to_decimal,
)
from yottaerp.utils.fallback import first_present

logger = logging.getLogger(__name__)

CATEGORY_BY_TYPE_CODE = {
    "QUOTE": DocumentCategory.QUOTE,
    "PRO": DocumentCategory.QUOTE,
    "ORDER": DocumentCategory.ORDER,
    "ORD": DocumentCategory.ORDER,
    "ORD_CLIENTE": DocumentCategory.ORDER,
    "ORD_FORNITORE": DocumentCategory.ORDER,
    "OF": DocumentCategory.ORDER,
    "DDT": DocumentCategory.DELIVERY_NOTE,
    "CAF": DocumentCategory.DELIVERY_NOTE,
    "INVOICE": DocumentCategory.INVOICE,
    "FAI": DocumentCategory.INVOICE,
    "FAD": DocumentCategory.INVOICE,
    "FAC": DocumentCategory.INVOICE,
    "NC": DocumentCategory.CREDIT_NOTE,
    "NDC": DocumentCategory.CREDIT_NOTE,
    "NCF": DocumentCategory.CREDIT_NOTE,
}

LOAD_MOVEMENTS = {
    "OF": MovementType.CARICO_FORNITORE,
    "ORD_FORNITORE": MovementType.CARICO_FORNITORE,
    "RESO_FORNITORE": MovementType.CARICO_FORNITORE,
    "NC": MovementType.RESO_CLIENTE,
    "NDC": MovementType.RESO_CLIENTE,
    "NCF": MovementType.RESO_CLIENTE,
}

UNLOAD_MOVEMENTS = {
    "DDT": MovementType.SCARICO_DDT,
    "CAF": MovementType.SCARICO_DDT,
    "FAI": MovementType.SCARICO_VENDITA,
    "FAD": MovementType.SCARICO_VENDITA,
    "FAC": MovementType.SCARICO_VENDITA,
    "RESO_FORNITORE": MovementType.RESO_FORNITORE,
}


def category_for_type_code(code: str) -> DocumentCategory:
    """Map a document type code to its fiscal category (invoice by default)."""
    return CATEGORY_BY_TYPE_CODE.get(code.upper(), DocumentCategory.INVOICE)


def movement_type_for(code: str, operation_sign_stock: int) -> MovementType:
    """Map a document type code and stock sign to a movement type.

    Raises:
        ValidationError: If the sign is neither +1 nor -1
    """
    code = code.upper()
    if operation_sign_stock == 1:
        return LOAD_MOVEMENTS.get(code, MovementType.CARICO_FORNITORE)
    if operation_sign_stock == -1:
        return UNLOAD_MOVEMENTS.get(code, MovementType.SCARICO_VENDITA)
    raise ValidationError(
        f"Cannot map document type {code} with stock sign {operation_sign_stock}"
    )


def resolve_line_warehouse(
    line: LineInput, product: Optional[Product], main_warehouse_id: Optional[int]
) -> Optional[int]:
    """Resolve the warehouse of a line: line, product default, document main."""
    return first_present(
        line.warehouse_id,
        product.default_warehouse_id if product is not None else None,
        main_warehouse_id,
    )


def stock_movement_for_line(
    line: ComputedLine,
    product: Optional[Product],
    document_type: DocumentTypeConfig,
) -> Optional[StockMovementIntent]:
    """Return the stock movement a priced line generates, if any.

    A movement is generated when the document type moves inventory, the line
    refers to a stock-managed product and a warehouse was resolved.
    """
    if not document_type.inventory_movement:
        return None
    if product is None or not product.manage_stock:
        return None
    if line.warehouse_id is None:
        logger.debug(
            "Line %d: no warehouse resolved for product %s, no stock movement",
            line.line_number,
            product.code,
        )
        return None
    sign = document_type.operation_sign_stock
    if sign is None:
        raise ValidationError(missing_stock_sign(document_type.code))

    return StockMovementIntent(
        line_number=line.line_number,
        product_id=product.id,
        warehouse_id=line.warehouse_id,
        quantity=MONEY_CONTEXT.multiply(line.quantity, sign),
        movement_type=movement_type_for(document_type.code, sign),
    )


def compute_document(
    lines: Sequence[LineInput],
    context: DocumentContext,
    products: Mapping[int, Product],
) -> DocumentComputation:
    """Compute everything a document create or update persists.

    Args:
        lines: Line inputs in document order
        context: Document type, date, main warehouse and payment condition
        products: Products referenced by the lines, keyed by ID, already
            checked against the caller's organization

    Returns:
        DocumentComputation with priced lines, totals, deadlines and stock
        movement intents

    Raises:
        ProductNotFound: If a line references a product missing from products
        ValidationError: If a stock-moving document type has no stock sign
        InvalidAmount: If a payment condition is set and the gross total is negative
    """
    net_total = ZERO
    vat_total = ZERO
    gross_total = ZERO
    computed_lines: list[ComputedLine] = []
    movements: list[StockMovementIntent] = []

    for line_number, line in enumerate(lines, start=1):
        product = None
        if line.product_id is not None:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFound(entity_not_found("Product", line.product_id))

        quantity = to_decimal(line.quantity)
        unit_price = to_decimal(line.unit_price)
        vat_rate = to_decimal(line.vat_rate)
        totals = calculate_line_total(quantity, unit_price, vat_rate)

        net_total = MONEY_CONTEXT.add(net_total, totals.net_amount)
        vat_total = MONEY_CONTEXT.add(vat_total, totals.vat_amount)
        gross_total = MONEY_CONTEXT.add(gross_total, totals.gross_amount)

        computed = ComputedLine(
            line_number=line_number,
            product_id=product.id if product is not None else None,
            product_code=line.product_code or (product.code if product else ""),
            description=line.description or (product.name if product else ""),
            quantity=quantity,
            unit_price=unit_price,
            vat_rate=vat_rate,
            totals=totals,
            warehouse_id=resolve_line_warehouse(line, product, context.main_warehouse_id),
        )
        computed_lines.append(computed)

        movement = stock_movement_for_line(computed, product, context.document_type)
        if movement is not None:
            movements.append(movement)

    net_total = round2(net_total)
    vat_total = round2(vat_total)
    gross_total = round2(gross_total)

    deadlines = []
    # A zero document has nothing to collect
    if context.payment_condition is not None and gross_total != ZERO:
        deadlines = calculate_deadlines(
            gross_total, context.payment_condition, context.document_date
        )

    return DocumentComputation(
        lines=computed_lines,
        net_total=net_total,
        vat_total=vat_total,
        gross_total=gross_total,
        deadlines=deadlines,
        stock_movements=movements,
    )
