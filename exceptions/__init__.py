"""
Custom exceptions module.

Routes render any AppError through AppError.to_dict().
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ExternalServiceError,
    DatabaseError,
    DatabaseConnectionError,

    # Inventory
    InventoryItemNotFoundError,

    # Generative model
    AINotConfiguredError,
    GenerationError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ExternalServiceError",
    "DatabaseError",
    "DatabaseConnectionError",

    # Inventory
    "InventoryItemNotFoundError",

    # Generative model
    "AINotConfiguredError",
    "GenerationError",
]
