"""
Urgency and metrics calculations - core business logic.

Pure functions over a normalized inventory snapshot. "now" is always
passed in so results are reproducible.

Rules:
    shelf life (with expiry) = max(1, round(days from now to expiry))
    urgent                   = remaining < 40 OR shelf life < 5
    avg days                 = round(mean(averageDays)), 0 for no items
    total value              = sum(price)
"""

from datetime import datetime
from typing import Iterable, Optional
import structlog

from models.inventory import InventoryItem
from models.advisory import InventoryMetrics
from utils.coercion import parse_date, round_half_up

logger = structlog.get_logger(__name__)

URGENT_REMAINING_BELOW = 40
URGENT_SHELF_LIFE_BELOW = 5
MIN_SHELF_LIFE_DAYS = 1

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(expiry: datetime, now: datetime) -> float:
    """Fractional days from now until expiry (negative if already past)."""
    return (expiry - now).total_seconds() / SECONDS_PER_DAY


def shelf_life_from_expiry(expiry: Optional[str], now: datetime) -> Optional[int]:
    """
    Derive shelf life from an expiry date.

    Args:
        expiry: Stored expiry value
        now: Reference time

    Returns:
        Whole days (never below 1), or None if expiry is absent/unparseable
    """
    expiry_at = parse_date(expiry)
    if expiry_at is None:
        if expiry:
            logger.debug("expiry_unparseable", expiry=expiry)
        return None

    return max(MIN_SHELF_LIFE_DAYS, round_half_up(days_until(expiry_at, now)))


def refresh_shelf_life(
    items: Iterable[InventoryItem],
    now: datetime
) -> list[InventoryItem]:
    """
    Apply the expiry override to every item that has an expiry date.

    Returns copies; the input items are left untouched.
    """
    refreshed = []
    for item in items:
        shelf_life = shelf_life_from_expiry(item.expiry, now)
        if shelf_life is None:
            refreshed.append(item)
        else:
            refreshed.append(item.model_copy(update={"shelf_life": float(shelf_life)}))
    return refreshed


def is_urgent(item: InventoryItem) -> bool:
    """Low on quantity or close to spoiling. Boundary values are not urgent."""
    return (
        item.remaining < URGENT_REMAINING_BELOW
        or item.shelf_life < URGENT_SHELF_LIFE_BELOW
    )


def compute_metrics(items: list[InventoryItem]) -> InventoryMetrics:
    """
    Compute urgency and aggregate stats for a snapshot.

    Shelf life should already be refreshed (see refresh_shelf_life).

    Args:
        items: Normalized inventory

    Returns:
        InventoryMetrics with urgent items in input order
    """
    urgent = [item for item in items if is_urgent(item)]
    avg_days = round_half_up(
        sum(item.average_days for item in items) / (len(items) or 1)
    )
    total_value = sum(item.price for item in items)

    logger.debug(
        "inventory_metrics_computed",
        items=len(items),
        urgent=len(urgent),
        avg_days=avg_days,
        total_value=total_value
    )

    return InventoryMetrics(
        urgent=urgent,
        avg_days=avg_days,
        total_value=total_value
    )
