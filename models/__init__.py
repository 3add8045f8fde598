"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    ApiSchema,
)
from models.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    MessageResponse,
)
from models.advisory import (
    SectionMarker,
    AdvisoryState,
    InventoryMetrics,
    AdvisorySections,
    AskRequest,
    AskResponse,
    WeeklyPlanRequest,
    WeeklyPlanResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "ApiSchema",

    # Inventory
    "InventoryItem",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "MessageResponse",

    # Advisory
    "SectionMarker",
    "AdvisoryState",
    "InventoryMetrics",
    "AdvisorySections",
    "AskRequest",
    "AskResponse",
    "WeeklyPlanRequest",
    "WeeklyPlanResponse",
]
