"""Parsing of --line options into document line inputs.

A line is written as comma separated key=value pairs::

    --line "product=VITE-M8,qty=100"
    --line "desc=Consulenza,qty=1,price=1.234,56,vat=22%"

A comma only starts a new pair when a known key and ``=`` follow it, so
Italian decimal commas stay inside their value.
"""

import re
from decimal import Decimal

from yottaerp.domain.entities import LineInput
from yottaerp.domain.product import ProductService
from yottaerp.domain.warehouse import WarehouseService
from yottaerp.utils.amount_parser import parse_amount
from yottaerp.utils.decimal_utils import ONE, ZERO

LINE_KEYS = ("qty", "price", "vat", "code", "desc", "product", "warehouse")

_PAIR_SEPARATOR = re.compile(r",\s*(?=(?:%s)\s*=)" % "|".join(LINE_KEYS), re.IGNORECASE)


def parse_line_option(text: str) -> dict[str, str]:
    """Split a --line value into its fields.

    Raises:
        ValueError: If a pair is malformed, a key is unknown or repeated,
            or qty is missing
    """
    fields: dict[str, str] = {}
    for pair in _PAIR_SEPARATOR.split(text.strip()):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        key = key.strip().lower()
        if not sep:
            raise ValueError(f"Invalid line field '{pair.strip()}': expected key=value")
        if key not in LINE_KEYS:
            raise ValueError(
                f"Unknown line field '{key}' (expected one of: {', '.join(LINE_KEYS)})"
            )
        if key in fields:
            raise ValueError(f"Line field '{key}' given more than once")
        fields[key] = value.strip()

    if not fields.get("qty"):
        raise ValueError(f"Line '{text}' needs a qty")
    return fields


def parse_vat_rate(value: str) -> Decimal:
    """Parse a VAT rate given as a fraction ("0.22") or a percentage ("22%")."""
    value = value.strip()
    if value.endswith("%"):
        rate = parse_amount(value[:-1]) / Decimal("100")
    else:
        rate = parse_amount(value)
    if rate < ZERO or rate > ONE:
        raise ValueError(
            f"VAT rate '{value}' must be a fraction (0.22) or a percentage (22%)"
        )
    return rate


def build_line_input(
    fields: dict[str, str],
    product_service: ProductService,
    warehouse_service: WarehouseService,
) -> LineInput:
    """Turn parsed line fields into a LineInput.

    Price and VAT rate default to the product's when a product is given;
    free lines must state both.
    """
    product = None
    if fields.get("product"):
        product = product_service.resolve_product(fields["product"])

    if fields.get("price"):
        unit_price = parse_amount(fields["price"])
    elif product is not None:
        unit_price = product.price
    else:
        raise ValueError("A line without a product needs a price")

    if fields.get("vat"):
        vat_rate = parse_vat_rate(fields["vat"])
    elif product is not None:
        vat_rate = product.vat_rate
    else:
        raise ValueError("A line without a product needs a vat rate")

    return LineInput(
        quantity=parse_amount(fields["qty"]),
        unit_price=unit_price,
        vat_rate=vat_rate,
        product_code=fields.get("code", ""),
        description=fields.get("desc", ""),
        product_id=product.id if product is not None else None,
        warehouse_id=warehouse_service.resolve_warehouse(fields.get("warehouse")),
    )


def build_line_inputs(
    line_options: tuple[str, ...],
    product_service: ProductService,
    warehouse_service: WarehouseService,
) -> list[LineInput]:
    """Parse every --line option in order."""
    return [
        build_line_input(parse_line_option(text), product_service, warehouse_service)
        for text in line_options
    ]
