"""
Advisory request/response schemas and the section marker contract.

SectionMarker is shared by the prompt builder (which tells the model which
headings to write) and the response parser (which splits on them).
Changing a marker here changes both sides at once.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Optional, Any
from enum import Enum

from models.base import ApiSchema
from models.inventory import InventoryItem


class SectionMarker(str, Enum):
    """Headings the weekly plan must be organised under, in output order."""
    WEEK_MENU = "📅 Weekly Menu"
    PURCHASE_LIST = "🧾 Shopping List"
    REMINDERS = "💡 Storage & Cooking Tips"


class AdvisoryState(str, Enum):
    """Where an advisory request ended up in the fallback ladder."""
    NO_MODEL_CONFIGURED = "NO_MODEL_CONFIGURED"
    MODEL_INVOKED = "MODEL_INVOKED"
    MODEL_SUCCEEDED = "MODEL_SUCCEEDED"
    MODEL_FAILED = "MODEL_FAILED"
    INVENTORY_LOAD_FAILED = "INVENTORY_LOAD_FAILED"


# ===================
# METRICS / SECTIONS
# ===================

class InventoryMetrics(ApiSchema):
    """Aggregates derived from one inventory snapshot."""

    urgent: list[InventoryItem] = Field(default_factory=list)
    avg_days: int = 0
    total_value: float = 0.0


class AdvisorySections(ApiSchema):
    """Named blocks extracted from a generated weekly plan."""

    week_menu: str = ""
    purchase_list: str = ""
    reminders: str = ""


# ===================
# GENERAL ADVICE
# ===================

class AskRequest(ApiSchema):
    """Free-text cooking question about what is in the fridge."""

    question: str = Field(default="", description="User question")


class AskResponse(ApiSchema):
    """Answer to a free-text question."""
    model_config = ConfigDict(str_strip_whitespace=False)  # answer is passed through verbatim

    answer: str


# ===================
# WEEKLY PLAN
# ===================

class WeeklyPlanRequest(ApiSchema):
    """Weekly menu planning request; both fields optional."""

    goal: Optional[str] = Field(None, description="Dietary goal or preference")
    capacity: Optional[str] = Field(None, description="Fridge slots currently used")

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_as_text(cls, v: Any) -> Any:
        """Frontends send capacity as a number or a label."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class WeeklyPlanResponse(ApiSchema):
    """Weekly plan sections plus the metrics they were built from."""
    model_config = ConfigDict(str_strip_whitespace=False)

    answer: str
    week_menu: str = ""
    purchase_list: str = ""
    reminders: str = ""
    urgent: list[InventoryItem] = Field(default_factory=list)
    total_value: float = 0.0
    avg_days: int = 0

    @classmethod
    def build(
        cls,
        answer: str,
        metrics: InventoryMetrics,
        sections: Optional[AdvisorySections] = None
    ) -> "WeeklyPlanResponse":
        """Combine an answer, its parsed sections and metrics."""
        sections = sections or AdvisorySections()
        return cls(
            answer=answer,
            week_menu=sections.week_menu,
            purchase_list=sections.purchase_list,
            reminders=sections.reminders,
            urgent=metrics.urgent,
            total_value=metrics.total_value,
            avg_days=metrics.avg_days
        )
