"""
Advisor API routes.

Both endpoints always answer 200 with a well-formed body; degraded
answers are chosen inside AdvisoryService.
"""

from fastapi import APIRouter
import structlog

from models.advisory import (
    AskRequest,
    AskResponse,
    WeeklyPlanRequest,
    WeeklyPlanResponse,
)
from services.advisory_service import get_advisory_service
from routes.inventory import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Advisor"])


@router.post("/ask-ai", response_model=AskResponse)
async def ask_ai(data: AskRequest):
    """
    Free-text cooking advice based on what is in the fridge.

    Without an API key the answer lists the fridge contents instead.
    """
    try:
        outcome = await get_advisory_service().ask(data)
        return outcome.response

    except Exception as e:
        return handle_error(e)


@router.post("/smart-suggest", response_model=WeeklyPlanResponse)
async def smart_suggest(data: WeeklyPlanRequest):
    """
    Weekly menu, shopping list and storage tips.

    Also returns urgent items, total inventory value and average
    consumption days, computed from the same snapshot.
    """
    try:
        outcome = await get_advisory_service().weekly_plan(data)
        return outcome.response

    except Exception as e:
        return handle_error(e)
