"""
Inventory API routes.

List, add and update fridge items. Paths match the frontend
contract (/api/items, /api/item, /api/update-item/{id}).
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    MessageResponse,
)
from services.inventory_service import get_inventory_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Inventory"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/items", response_model=list[InventoryItem])
async def list_items():
    """
    Get every fridge item, normalized.

    Shelf life is returned as stored; the expiry override is only applied
    by the advisor endpoints.
    """
    try:
        service = get_inventory_service()
        return service.list_items()

    except Exception as e:
        return handle_error(e)


@router.post("/item", response_model=MessageResponse)
async def add_item(data: InventoryItemCreate):
    """
    Add a fridge item.

    Defaults: remaining 100%, averageDays 3, shelfLife 7.

    Raises:
        422: Validation error
    """
    try:
        service = get_inventory_service()
        service.add_item(data)
        return MessageResponse(message="Item added")

    except Exception as e:
        return handle_error(e)


@router.put("/update-item/{item_id}", response_model=MessageResponse)
async def update_item(item_id: str, data: InventoryItemUpdate):
    """
    Update how much of an item is left.

    Raises:
        404: Item not found
        422: Validation error
    """
    try:
        service = get_inventory_service()
        service.update_remaining(item_id, data)
        return MessageResponse(message="Item updated")

    except Exception as e:
        return handle_error(e)
