"""
Value accessors.

Read a logical field out of an item's column-value bag. Neither function
raises: unmapped fields, missing columns and unparseable numbers all come
back as absent values.
"""

import math
from typing import Mapping, Optional

from tripeval.models.raw_item import ColumnValue
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry


def get_text(
    bag: Mapping[str, ColumnValue],
    field: str,
    registry: ColumnRegistry = COLUMN_REGISTRY
) -> str:
    """
    Display text of a logical field.

    Args:
        bag: Column id -> ColumnValue mapping of one item
        field: Logical field name from the column registry
        registry: Registry used to resolve the column id

    Returns:
        The display text, or "" when the field is unmapped or empty
    """
    column_id = registry.resolve(field)
    if column_id is None:
        return ""

    column = bag.get(column_id)
    if column is None or not column.text:
        return ""
    return column.text


def get_number(
    bag: Mapping[str, ColumnValue],
    field: str,
    registry: ColumnRegistry = COLUMN_REGISTRY
) -> Optional[float]:
    """
    Numeric value of a logical field.

    The display text is parsed as a float; no rounding or clamping.
    Returns None for empty, non-numeric or non-finite text.
    """
    text = get_text(bag, field, registry).strip()
    if not text:
        return None

    try:
        number = float(text)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return number
