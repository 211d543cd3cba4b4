"""Ordered fallback resolution for cascading per-line defaults."""

from typing import Optional, TypeVar

T = TypeVar("T")


def first_present(*candidates: Optional[T]) -> Optional[T]:
    """Return the first candidate that is set.

    Candidates are given in priority order. ``None`` and empty strings count
    as unset; ``0`` and ``False`` are real values.

    Example:
        Warehouse of a document line: the line's own warehouse, then the
        product's default warehouse, then the document's main warehouse::

            first_present(line.warehouse_id, product.default_warehouse_id, main_warehouse_id)

    Returns:
        The first set value, or None when every candidate is unset
    """
    for candidate in candidates:
        if candidate is None or candidate == "":
            continue
        return candidate
    return None
