"""
Inventory item schemas for validation and serialization.

InventoryItem is the canonical, normalized shape every advisory
computation works on. The Create/Update schemas validate writes to the
row store.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import date

from models.base import ApiSchema

DEFAULT_WEIGHT = "unspecified"
DEFAULT_REMAINING = 0.0
DEFAULT_AVERAGE_DAYS = 3.0
DEFAULT_SHELF_LIFE = 7.0
DEFAULT_PRICE = 0.0

# Defaults applied when a new row is written, not when one is read.
NEW_ITEM_REMAINING = 100.0


class InventoryItem(ApiSchema):
    """
    Normalized fridge item.

    Built by the inventory normalizer; every numeric field already carries
    its default when the stored value was missing or unusable.
    """

    id: Optional[str] = Field(None, description="Row identifier in the store")
    name: str = Field(default="", description="Display name (not unique)")
    price: float = Field(default=DEFAULT_PRICE, ge=0, description="Unit price")
    weight: str = Field(default=DEFAULT_WEIGHT, description="Free-form weight label")
    expiry: Optional[str] = Field(None, description="Expiry date as stored")
    remaining: float = Field(
        default=DEFAULT_REMAINING,
        ge=0,
        le=100,
        description="Percent of the item left"
    )
    average_days: float = Field(
        default=DEFAULT_AVERAGE_DAYS,
        gt=0,
        description="Typical days to consume the item"
    )
    shelf_life: float = Field(
        default=DEFAULT_SHELF_LIFE,
        gt=0,
        description="Days until the item spoils"
    )


class InventoryItemCreate(ApiSchema):
    """
    Add a new item to the fridge.

    Required: name
    Optional: everything else (defaults match a freshly bought item)
    """

    name: str = Field(..., min_length=1, max_length=200, description="Item name")
    price: Optional[float] = Field(None, ge=0, description="Unit price")
    weight: Optional[str] = Field(None, max_length=100, description="Weight label, e.g. '500g'")
    expiry: Optional[date] = Field(None, description="Expiry date")
    remaining: float = Field(
        default=NEW_ITEM_REMAINING,
        ge=0,
        le=100,
        description="Percent left"
    )
    average_days: float = Field(
        default=DEFAULT_AVERAGE_DAYS,
        gt=0,
        description="Typical days to consume"
    )
    shelf_life: float = Field(
        default=DEFAULT_SHELF_LIFE,
        gt=0,
        description="Days until spoilage"
    )

    def to_row(self) -> dict:
        """Row fields in the store's camelCase column naming."""
        row = self.model_dump(by_alias=True)
        if self.expiry is not None:
            row["expiry"] = self.expiry.isoformat()
        return row


class InventoryItemUpdate(ApiSchema):
    """Update how much of an item is left."""

    remaining: float = Field(..., ge=0, le=100, description="Percent left")

    @field_validator("remaining")
    @classmethod
    def round_remaining(cls, v: float) -> float:
        """Round to 1 decimal place."""
        return round(v, 1)


class MessageResponse(ApiSchema):
    """Plain acknowledgement."""

    message: str
