"""
Business logic services.

Each service handles one domain area.
"""

from services.inventory_service import InventoryService, get_inventory_service
from services.text_generation_service import (
    TextGenerationService,
    get_text_generation_service,
)
from services.advisory_service import (
    AdvisoryService,
    AdvisoryOutcome,
    get_advisory_service,
)

__all__ = [
    "InventoryService",
    "get_inventory_service",
    "TextGenerationService",
    "get_text_generation_service",
    "AdvisoryService",
    "AdvisoryOutcome",
    "get_advisory_service",
]
