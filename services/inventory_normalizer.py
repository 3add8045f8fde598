"""
Inventory normalizer.

Maps raw store rows into InventoryItem with every default applied.
Rows are never dropped: a row with nothing but a name, or even without
one, still normalizes.
"""

from typing import Any, Iterable, Mapping, Optional

from models.inventory import (
    InventoryItem,
    DEFAULT_WEIGHT,
    DEFAULT_REMAINING,
    DEFAULT_AVERAGE_DAYS,
    DEFAULT_SHELF_LIFE,
    DEFAULT_PRICE,
)
from utils.coercion import (
    coerce_non_negative,
    coerce_optional_text,
    coerce_percent,
    coerce_positive,
    coerce_text,
)


def _field(row: Mapping[str, Any], *keys: str) -> Any:
    """First non-missing value among the column spellings."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def normalize_row(row: Mapping[str, Any]) -> InventoryItem:
    """
    Normalize one store row.

    Columns use the sheet's camelCase names (averageDays, shelfLife);
    snake_case spellings are accepted too.

    Args:
        row: Raw record with named fields

    Returns:
        InventoryItem with defaults filled in
    """
    row_id: Optional[Any] = _field(row, "id")

    return InventoryItem(
        id=str(row_id) if row_id is not None else None,
        name=coerce_text(_field(row, "name"), ""),
        price=coerce_non_negative(_field(row, "price"), DEFAULT_PRICE),
        weight=coerce_text(_field(row, "weight"), DEFAULT_WEIGHT),
        expiry=coerce_optional_text(_field(row, "expiry")),
        remaining=coerce_percent(_field(row, "remaining"), DEFAULT_REMAINING),
        average_days=coerce_positive(
            _field(row, "averageDays", "average_days"),
            DEFAULT_AVERAGE_DAYS
        ),
        shelf_life=coerce_positive(
            _field(row, "shelfLife", "shelf_life"),
            DEFAULT_SHELF_LIFE
        ),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[InventoryItem]:
    """Normalize rows, preserving order."""
    return [normalize_row(row) for row in rows]
