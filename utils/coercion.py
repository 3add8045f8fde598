"""
Field coercion for raw inventory rows.

Rows come from a spreadsheet-like store, so every value may be a string,
blank, missing or garbage. Each helper returns a typed default instead of
raising, which keeps one bad cell from dropping a whole row.
"""

import math
from datetime import datetime, date, timezone
from typing import Any, Optional

DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d")


def to_float(value: Any) -> Optional[float]:
    """
    Parse a number from a cell value.

    Args:
        value: int, float or numeric string (surrounding whitespace allowed)

    Returns:
        Finite float, or None if the value is not a usable number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (int, float)):
        return None

    try:
        number = float(value)
    except (OverflowError, ValueError):
        # ints beyond float range, or non-numeric text
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_number(
    value: Any,
    default: float,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    positive: bool = False
) -> float:
    """
    Finite number within the given bounds, else default.

    Args:
        value: Raw cell value
        default: Returned for unusable or out-of-range values
        minimum: Values below this return default
        maximum: Values above this return default
        positive: Zero and negative values return default
    """
    number = to_float(value)
    if number is None:
        return default
    if positive and number <= 0:
        return default
    if minimum is not None and number < minimum:
        return default
    if maximum is not None and number > maximum:
        return default
    return number


def coerce_non_negative(value: Any, default: float) -> float:
    """Zero or more, else default (prices)."""
    return coerce_number(value, default, minimum=0)


def coerce_positive(value: Any, default: float) -> float:
    """Strictly positive, else default (day counts)."""
    return coerce_number(value, default, positive=True)


def coerce_percent(value: Any, default: float) -> float:
    """Number clamped into [0, 100], else default."""
    return min(100.0, max(0.0, coerce_number(value, default)))


def coerce_text(value: Any, default: str) -> str:
    """Trimmed string, or default when missing/blank."""
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def coerce_optional_text(value: Any) -> Optional[str]:
    """Trimmed string, or None when missing/blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an expiry cell into a naive datetime.

    Accepts ISO dates/datetimes plus YYYY/MM/DD and YYYY.MM.DD.
    Timezone-aware datetimes are converted to naive UTC; naive values
    are taken as UTC already.

    Returns:
        datetime, or None if the value is not a recognisable date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            for fmt in DATE_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
        if parsed is None:
            return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError):
            # offset pushes the date outside datetime's range
            return None
    return parsed


def utc_now() -> datetime:
    """Current time as naive UTC, the same frame parse_date returns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounding up, unlike round()'s banker's rounding."""
    return math.floor(value + 0.5)
