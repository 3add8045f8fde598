"""
Unit tests for the advisory orchestrator.

Covers every terminal state for both operations. Collaborators come from
conftest (row_store, generator, fixed_now).
"""

import asyncio

import pytest

from models.advisory import (
    AdvisoryState,
    AskRequest,
    WeeklyPlanRequest,
    SectionMarker,
)
from services.advisory_service import (
    ASK_MODEL_FAILED,
    ASK_INVENTORY_FAILED,
    PLAN_NO_MODEL,
    PLAN_MODEL_FAILED,
    PLAN_INVENTORY_FAILED,
)
from exceptions import DatabaseError, GenerationError
from tests.factories import InventoryRowFactory


def run(coro):
    return asyncio.run(coro)


# ===================
# GENERAL ADVICE
# ===================

class TestAsk:
    """Tests for AdvisoryService.ask."""

    def test_no_model_lists_inventory(self, advisory_service, row_store, generator):
        """Scenario A: preview answer lists each item with its remaining percent."""
        row_store.read_all_rows.return_value = [
            InventoryRowFactory.create_sparse(name="Milk", remaining=20),
            InventoryRowFactory.create_sparse(name="Eggs", remaining=80),
        ]
        generator.configured = False

        outcome = run(advisory_service.ask(AskRequest(question="What should I cook?")))

        assert outcome.state == AdvisoryState.NO_MODEL_CONFIGURED
        assert "- Milk (20% left)" in outcome.response.answer
        assert "- Eggs (80% left)" in outcome.response.answer
        generator.generate.assert_not_called()

    def test_success_returns_text_verbatim(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.return_value = f"  Make an omelette.\n{SectionMarker.WEEK_MENU.value} not parsed  "

        outcome = run(advisory_service.ask(AskRequest(question="Breakfast?")))

        assert outcome.state == AdvisoryState.MODEL_SUCCEEDED
        assert outcome.response.answer == f"  Make an omelette.\n{SectionMarker.WEEK_MENU.value} not parsed  "

    def test_prompt_contains_question_and_items(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.return_value = "ok"

        run(advisory_service.ask(AskRequest(question="Breakfast?")))

        prompt = generator.generate.call_args.args[0]
        assert "Breakfast?" in prompt
        assert "- Milk: 20% left" in prompt
        assert "- Eggs: 80% left" in prompt

    def test_prompt_uses_refreshed_shelf_life(self, advisory_service, row_store, generator):
        """Expiry 10 days after fixed_now overrides the stored 30 days."""
        row_store.read_all_rows.return_value = [
            InventoryRowFactory.create(name="Cheese", shelfLife="30", expiry="2025-01-11"),
        ]
        generator.generate.return_value = "ok"

        run(advisory_service.ask(AskRequest(question="q")))

        assert "keeps about 10 days" in generator.generate.call_args.args[0]

    def test_out_of_range_expiry_keeps_stored_shelf_life(self, advisory_service, row_store, generator):
        """An expiry that cannot be converted to UTC is ignored, not raised."""
        row_store.read_all_rows.return_value = [
            InventoryRowFactory.create(name="Jam", shelfLife="30", expiry="0001-01-01T00:00:00+01:00"),
        ]
        generator.generate.return_value = "ok"

        outcome = run(advisory_service.ask(AskRequest(question="q")))

        assert outcome.state == AdvisoryState.MODEL_SUCCEEDED
        assert "keeps about 30 days" in generator.generate.call_args.args[0]

    def test_generation_error_uses_fallback(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.side_effect = GenerationError("boom")

        outcome = run(advisory_service.ask(AskRequest(question="q")))

        assert outcome.state == AdvisoryState.MODEL_FAILED
        assert outcome.response.answer == ASK_MODEL_FAILED
        assert "boom" not in outcome.response.answer

    def test_inventory_failure_skips_model(self, advisory_service, row_store, generator):
        row_store.read_all_rows.side_effect = DatabaseError("select", "connection refused")

        outcome = run(advisory_service.ask(AskRequest(question="q")))

        assert outcome.state == AdvisoryState.INVENTORY_LOAD_FAILED
        assert outcome.response.answer == ASK_INVENTORY_FAILED
        generator.generate.assert_not_called()


# ===================
# WEEKLY PLAN
# ===================

class TestWeeklyPlan:
    """Tests for AdvisoryService.weekly_plan."""

    def test_generation_error_keeps_metrics(self, advisory_service, row_store, generator, sample_rows):
        """Scenario B: fallback answer, empty sections, real metrics."""
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.side_effect = GenerationError("provider down")

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest()))
        response = outcome.response

        assert outcome.state == AdvisoryState.MODEL_FAILED
        assert response.answer == PLAN_MODEL_FAILED
        assert response.week_menu == ""
        assert response.purchase_list == ""
        assert response.reminders == ""
        assert [i.name for i in response.urgent] == ["Milk"]
        assert response.total_value == pytest.approx(9.5)
        assert response.avg_days == 4  # mean of 2 and 5 = 3.5 → 4

    def test_only_purchase_list_marker(self, advisory_service, row_store, generator, sample_rows):
        """Scenario C: missing markers give empty sections."""
        row_store.read_all_rows.return_value = sample_rows
        generated = f"{SectionMarker.PURCHASE_LIST.value}\n- Milk 1L\n- Bread 1 loaf"
        generator.generate.return_value = generated

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest(goal="cheap")))
        response = outcome.response

        assert outcome.state == AdvisoryState.MODEL_SUCCEEDED
        assert response.answer == generated
        assert response.week_menu == ""
        assert response.purchase_list == "- Milk 1L\n- Bread 1 loaf"
        assert response.reminders == ""

    def test_all_sections_parsed(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.return_value = (
            f"{SectionMarker.WEEK_MENU.value}\n| Mon | Stir fry |\n"
            f"{SectionMarker.PURCHASE_LIST.value}\n- Rice 1kg\n"
            f"{SectionMarker.REMINDERS.value}\nUse the milk first."
        )

        response = run(advisory_service.weekly_plan(WeeklyPlanRequest())).response

        assert response.week_menu == "| Mon | Stir fry |"
        assert response.purchase_list == "- Rice 1kg"
        assert response.reminders == "Use the milk first."

    def test_no_model_returns_metrics(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.configured = False

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest()))

        assert outcome.state == AdvisoryState.NO_MODEL_CONFIGURED
        assert outcome.response.answer == PLAN_NO_MODEL
        assert [i.name for i in outcome.response.urgent] == ["Milk"]
        assert outcome.response.week_menu == ""
        generator.generate.assert_not_called()

    def test_inventory_failure_zeroes_metrics(self, advisory_service, row_store, generator):
        row_store.read_all_rows.side_effect = RuntimeError("sheet unreachable")

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest()))
        response = outcome.response

        assert outcome.state == AdvisoryState.INVENTORY_LOAD_FAILED
        assert response.answer == PLAN_INVENTORY_FAILED
        assert response.urgent == []
        assert response.total_value == 0
        assert response.avg_days == 0
        generator.generate.assert_not_called()

    def test_timeout_is_model_failure(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows

        async def slow(prompt):
            await asyncio.sleep(1)
            return "too late"

        generator.generate.side_effect = slow
        advisory_service.generation_timeout = 0.01

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest()))

        assert outcome.state == AdvisoryState.MODEL_FAILED
        assert outcome.response.answer == PLAN_MODEL_FAILED

    def test_urgency_uses_expiry_override(self, advisory_service, row_store, generator):
        """Plenty left, long stored shelf life, but expiring in 3 days → urgent."""
        row_store.read_all_rows.return_value = [
            InventoryRowFactory.create(name="Salmon", remaining="90", shelfLife="30", expiry="2025-01-04"),
            InventoryRowFactory.create(name="Rice", remaining="90", shelfLife="30"),
        ]
        generator.configured = False

        response = run(advisory_service.weekly_plan(WeeklyPlanRequest())).response

        assert [i.name for i in response.urgent] == ["Salmon"]
        assert response.urgent[0].shelf_life == 3

    def test_oversized_cell_keeps_every_row(self, advisory_service, row_store, generator):
        """One unusable number falls back to its default; the request still succeeds."""
        row_store.read_all_rows.return_value = [
            InventoryRowFactory.create(name="Caviar", averageDays=10**400, price=10**400),
            InventoryRowFactory.create(name="Rice", averageDays="5", price="4"),
        ]
        generator.configured = False

        outcome = run(advisory_service.weekly_plan(WeeklyPlanRequest()))

        assert outcome.state == AdvisoryState.NO_MODEL_CONFIGURED
        assert outcome.response.avg_days == 4  # mean of default 3 and 5
        assert outcome.response.total_value == pytest.approx(4.0)

    def test_prompt_carries_goal_and_capacity(self, advisory_service, row_store, generator, sample_rows):
        row_store.read_all_rows.return_value = sample_rows
        generator.generate.return_value = "ok"

        run(advisory_service.weekly_plan(WeeklyPlanRequest(goal="Low carb", capacity=14)))

        prompt = generator.generate.call_args.args[0]
        assert "Low carb" in prompt
        assert "Slots currently used: 14." in prompt
        assert generator.generate.await_count == 1


class TestDefaults:
    """Tests for collaborator defaults."""

    def test_default_clock_is_naive_utc(self, row_store, generator):
        """Clock and parsed expiries share the naive UTC frame."""
        from services.advisory_service import AdvisoryService
        from utils.coercion import utc_now

        service = AdvisoryService(row_store=row_store, generator=generator)

        assert service.clock is utc_now
