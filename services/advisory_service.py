"""
Advisory orchestration - core business logic.

Runs one request through the pipeline

    rows → items → shelf-life refresh → metrics → prompt → model → sections

and picks a fallback tier when a step cannot complete:

    INVENTORY_LOAD_FAILED   store unreadable: apology, zeroed metrics
    NO_MODEL_CONFIGURED     no API key: canned answer from the inventory
    MODEL_FAILED            model error/timeout: static fallback sentence
    MODEL_SUCCEEDED         generated text (parsed for weekly plans)

Every request ends in one of these states; no exception reaches the caller.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Generic, Optional, TypeVar
import structlog

from config import settings
from models.inventory import InventoryItem
from models.advisory import (
    AdvisoryState,
    InventoryMetrics,
    AskRequest,
    AskResponse,
    WeeklyPlanRequest,
    WeeklyPlanResponse,
)
from services.inventory_normalizer import normalize_rows
from services.inventory_service import get_inventory_service
from services.metrics_service import refresh_shelf_life, compute_metrics
from services.prompt_builder import build_advice_prompt, build_weekly_plan_prompt
from services.response_parser import parse_sections
from services.text_generation_service import get_text_generation_service
from utils.coercion import utc_now
from utils.text_utils import format_number

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# ===================
# FALLBACK MESSAGES
# ===================

ASK_PREVIEW_HEADER = (
    "⚠️ ANTHROPIC_API_KEY is not set, running in preview mode.\n"
    "Your fridge currently has:"
)
ASK_PREVIEW_FOOTER = (
    "Plan the next few days around items that are running low or close to expiry."
)
ASK_MODEL_FAILED = (
    "The AI advisor can't be reached right now, but you can start by cooking "
    "with items that are running low or close to expiry."
)
ASK_INVENTORY_FAILED = (
    "Fridge inventory is unavailable right now, so no advice can be given. "
    "Please try again later."
)

PLAN_NO_MODEL = (
    "⚠️ Not connected to the AI model. Order your meals by remaining amount "
    "and shelf life in the meantime."
)
PLAN_MODEL_FAILED = (
    "The AI menu advisor is offline for now, but you can use up the items "
    "closest to expiry first."
)
PLAN_INVENTORY_FAILED = (
    "Smart menu planning hit a problem loading your inventory. "
    "Please try again later."
)


@dataclass
class StepResult(Generic[T]):
    """Value of a pipeline step, or the error that stopped it."""
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AdvisoryOutcome(Generic[T]):
    """Terminal state of a request and the response it produced."""
    state: AdvisoryState
    response: T


class AdvisoryService:
    """
    Advisory orchestrator.

    Collaborators are injected so tests can swap the store, the model and
    the clock:
        row_store: anything with read_all_rows()
        generator: anything with a `configured` property and async generate(prompt)
        clock: zero-argument callable returning the current naive UTC datetime
    """

    def __init__(
        self,
        row_store=None,
        generator=None,
        clock: Optional[Callable[[], datetime]] = None,
        generation_timeout: Optional[float] = None,
        language: Optional[str] = None
    ):
        self.row_store = row_store or get_inventory_service()
        self.generator = generator or get_text_generation_service()
        self.clock = clock or utc_now
        self.generation_timeout = generation_timeout or settings.ai_timeout_seconds
        self.language = language or settings.advisor_language

    # ===================
    # PIPELINE STEPS
    # ===================

    async def _load_inventory(self) -> StepResult[list[InventoryItem]]:
        """Read and normalize all rows; store failures become a result."""
        try:
            rows = await asyncio.to_thread(self.row_store.read_all_rows)
            return StepResult(value=normalize_rows(rows))
        except Exception as e:
            logger.error(
                "inventory_load_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            return StepResult(error=e)

    async def _generate(self, prompt: str) -> StepResult[str]:
        """Invoke the model once, bounded by the generation timeout."""
        try:
            text = await asyncio.wait_for(
                self.generator.generate(prompt),
                timeout=self.generation_timeout
            )
            return StepResult(value=text)
        except asyncio.TimeoutError as e:
            logger.error("generation_timed_out", timeout=self.generation_timeout)
            return StepResult(error=e)
        except Exception as e:
            logger.error(
                "generation_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            return StepResult(error=e)

    def _snapshot(self, items: list[InventoryItem]) -> tuple[list[InventoryItem], InventoryMetrics]:
        """Refresh shelf life against now, then compute metrics."""
        items = refresh_shelf_life(items, self.clock())
        return items, compute_metrics(items)

    @staticmethod
    def _preview_answer(items: list[InventoryItem]) -> str:
        lines = [ASK_PREVIEW_HEADER]
        lines.extend(
            f"- {item.name} ({format_number(item.remaining)}% left)"
            for item in items
        )
        lines.append(ASK_PREVIEW_FOOTER)
        return "\n".join(lines)

    def _finish(self, kind: str, state: AdvisoryState, response: T) -> AdvisoryOutcome[T]:
        logger.info("advisory_completed", kind=kind, state=state.value)
        return AdvisoryOutcome(state=state, response=response)

    # ===================
    # OPERATIONS
    # ===================

    async def ask(self, request: AskRequest) -> AdvisoryOutcome[AskResponse]:
        """
        Answer a free-text cooking question from the current inventory.

        Args:
            request: User question

        Returns:
            AdvisoryOutcome with the terminal state and AskResponse
        """
        logger.info("advice_requested", question_length=len(request.question))

        loaded = await self._load_inventory()
        if not loaded.ok:
            return self._finish(
                "ask",
                AdvisoryState.INVENTORY_LOAD_FAILED,
                AskResponse(answer=ASK_INVENTORY_FAILED)
            )

        items, _ = self._snapshot(loaded.value)

        if not self.generator.configured:
            return self._finish(
                "ask",
                AdvisoryState.NO_MODEL_CONFIGURED,
                AskResponse(answer=self._preview_answer(items))
            )

        prompt = build_advice_prompt(request.question, items, self.language)
        logger.debug("advisory_state", kind="ask", state=AdvisoryState.MODEL_INVOKED.value)
        generated = await self._generate(prompt)

        if not generated.ok:
            return self._finish(
                "ask",
                AdvisoryState.MODEL_FAILED,
                AskResponse(answer=ASK_MODEL_FAILED)
            )

        return self._finish(
            "ask",
            AdvisoryState.MODEL_SUCCEEDED,
            AskResponse(answer=generated.value)
        )

    async def weekly_plan(self, request: WeeklyPlanRequest) -> AdvisoryOutcome[WeeklyPlanResponse]:
        """
        Plan a week of meals and a shopping list from the current inventory.

        Metrics are computed before the model branch, so every state except
        INVENTORY_LOAD_FAILED returns real urgent/avgDays/totalValue.

        Args:
            request: Optional goal and capacity

        Returns:
            AdvisoryOutcome with the terminal state and WeeklyPlanResponse
        """
        logger.info(
            "weekly_plan_requested",
            has_goal=bool(request.goal),
            capacity=request.capacity
        )

        loaded = await self._load_inventory()
        if not loaded.ok:
            return self._finish(
                "weekly_plan",
                AdvisoryState.INVENTORY_LOAD_FAILED,
                WeeklyPlanResponse.build(PLAN_INVENTORY_FAILED, InventoryMetrics())
            )

        items, metrics = self._snapshot(loaded.value)

        if not self.generator.configured:
            return self._finish(
                "weekly_plan",
                AdvisoryState.NO_MODEL_CONFIGURED,
                WeeklyPlanResponse.build(PLAN_NO_MODEL, metrics)
            )

        prompt = build_weekly_plan_prompt(
            request.goal,
            request.capacity,
            items,
            self.language
        )
        logger.debug("advisory_state", kind="weekly_plan", state=AdvisoryState.MODEL_INVOKED.value)
        generated = await self._generate(prompt)

        if not generated.ok:
            return self._finish(
                "weekly_plan",
                AdvisoryState.MODEL_FAILED,
                WeeklyPlanResponse.build(PLAN_MODEL_FAILED, metrics)
            )

        return self._finish(
            "weekly_plan",
            AdvisoryState.MODEL_SUCCEEDED,
            WeeklyPlanResponse.build(
                generated.value,
                metrics,
                parse_sections(generated.value)
            )
        )


# Singleton instance
_advisory_service: Optional[AdvisoryService] = None


def get_advisory_service() -> AdvisoryService:
    """Get or create AdvisoryService instance."""
    global _advisory_service
    if _advisory_service is None:
        _advisory_service = AdvisoryService()
    return _advisory_service
