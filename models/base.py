"""
Base schemas for all models.

ApiSchema is the wire-facing variant: snake_case attributes in Python,
camelCase keys in JSON (averageDays, shelfLife, weekMenu, ...).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class ApiSchema(BaseSchema):
    """Schema exchanged with the frontend using camelCase keys."""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True
    )
