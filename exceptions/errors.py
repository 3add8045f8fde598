"""
Application exceptions.

Each subclass pins its error code and HTTP status as class attributes;
routes turn any AppError into the shared error body via to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code: Stable error code (e.g., "INVENTORY_ITEM_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Extra context rendered in the error body
    """

    code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Error body returned by every endpoint."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """A stored record does not exist (404)."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found", details={"id": identifier})


class ExternalServiceError(AppError):
    """A third-party dependency failed (503)."""

    status_code = 503

    def __init__(self, service: str, message: str, details: Optional[dict] = None):
        super().__init__(message, details={"service": service, **(details or {})})


# ===================
# ROW STORE
# ===================

class DatabaseError(AppError):
    """A Supabase query failed."""

    code = "DATABASE_ERROR"

    def __init__(self, operation: str, message: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            details={"operation": operation}
        )


class DatabaseConnectionError(DatabaseError):
    """Supabase is unreachable or not configured."""

    code = "DATABASE_UNAVAILABLE"
    status_code = 503

    def __init__(self, message: str):
        super().__init__("connect", message)


class InventoryItemNotFoundError(NotFoundError):
    code = "INVENTORY_ITEM_NOT_FOUND"

    def __init__(self, item_id: str):
        super().__init__("Inventory item", item_id)


# ===================
# TEXT GENERATION
# ===================

class AINotConfiguredError(AppError):
    """No ANTHROPIC_API_KEY; callers should use the preview answer instead."""

    code = "AI_NOT_CONFIGURED"
    status_code = 503

    def __init__(self):
        super().__init__("ANTHROPIC_API_KEY is not set")


class GenerationError(ExternalServiceError):
    """The model call failed or returned no text."""

    code = "GENERATION_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("generation", message, details)
