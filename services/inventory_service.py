"""
Inventory service: the Supabase-backed row store.

Rows are stored as written (camelCase columns, one per item
attribute). Normalization happens on read, in inventory_normalizer.
"""

from typing import Any, Optional
import structlog

from config import settings, get_supabase_client
from models.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
)
from services.inventory_normalizer import normalize_rows
from exceptions import (
    AppError,
    InventoryItemNotFoundError,
    DatabaseError,
)

logger = structlog.get_logger(__name__)


class InventoryService:
    """
    Inventory row store.

    read_all_rows / add_row / update_row are the raw store contract the
    advisor depends on; list_items / add_item / update_remaining are the
    typed versions used by the inventory routes.
    """

    def __init__(self, table: Optional[str] = None):
        self.table = table or settings.inventory_table

    @property
    def db(self):
        # Resolved per call so a missing Supabase config fails the request,
        # not service construction.
        return get_supabase_client()

    # ===================
    # RAW ROW OPERATIONS
    # ===================

    def read_all_rows(self) -> list[dict[str, Any]]:
        """
        Read every row in store order.

        Returns:
            List of raw row dicts

        Raises:
            DatabaseError: If the store is unreachable or the query fails
        """
        logger.debug("reading_inventory_rows", table=self.table)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("id")
                .execute()
            )
        except AppError:
            raise
        except Exception as e:
            logger.error("read_inventory_rows_failed", error=str(e))
            raise DatabaseError("select", str(e))

        rows = result.data or []
        logger.info("inventory_rows_read", count=len(rows))
        return rows

    def add_row(self, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row.

        Args:
            fields: Column values

        Returns:
            Inserted row as stored
        """
        logger.info("adding_inventory_row", name=fields.get("name"))

        try:
            result = (
                self.db.table(self.table)
                .insert(fields)
                .execute()
            )
        except AppError:
            raise
        except Exception as e:
            logger.error("add_inventory_row_failed", name=fields.get("name"), error=str(e))
            raise DatabaseError("insert", str(e))

        row = result.data[0] if result.data else dict(fields)
        logger.info("inventory_row_added", item_id=row.get("id"))
        return row

    def update_row(self, item_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Update columns of one row.

        Args:
            item_id: Row identifier
            fields: Columns to change

        Returns:
            Updated row

        Raises:
            InventoryItemNotFoundError: If no row has this id
        """
        logger.info("updating_inventory_row", item_id=item_id, fields=list(fields.keys()))

        try:
            result = (
                self.db.table(self.table)
                .update(fields)
                .eq("id", item_id)
                .execute()
            )
        except AppError:
            raise
        except Exception as e:
            logger.error("update_inventory_row_failed", item_id=item_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise InventoryItemNotFoundError(item_id)

        return result.data[0]

    # ===================
    # TYPED OPERATIONS
    # ===================

    def list_items(self) -> list[InventoryItem]:
        """All rows, normalized (stored shelf life, no expiry override)."""
        items = normalize_rows(self.read_all_rows())
        logger.info("inventory_items_retrieved", count=len(items))
        return items

    def add_item(self, data: InventoryItemCreate) -> dict[str, Any]:
        """Add a new fridge item with fresh-item defaults."""
        return self.add_row(data.to_row())

    def update_remaining(self, item_id: str, data: InventoryItemUpdate) -> dict[str, Any]:
        """Set how much of an item is left."""
        return self.update_row(item_id, {"remaining": data.remaining})


# Singleton instance for convenience
_inventory_service: Optional[InventoryService] = None


def get_inventory_service() -> InventoryService:
    """Get or create InventoryService instance."""
    global _inventory_service
    if _inventory_service is None:
        _inventory_service = InventoryService()
    return _inventory_service
