"""
Text utilities for rendering inventory values into prompts and messages.
"""

from typing import Optional


def format_number(value: float) -> str:
    """
    Render a number the way a person would write it.

    - 20.0 → "20"
    - 3.5 → "3.5"
    - 0.1 + 0.2 → "0.3"

    Args:
        value: Number to render

    Returns:
        Shortest readable string for the value
    """
    number = round(float(value), 2)
    if number.is_integer():
        return str(int(number))
    return str(number)


def format_optional(value: Optional[str], placeholder: str) -> str:
    """Return value, or placeholder when it is empty."""
    if value is None:
        return placeholder
    text = value.strip()
    return text or placeholder
