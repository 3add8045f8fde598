"""
Prompt builder for the fridge advisor.

Both builders are pure: identical inputs render byte-identical prompts,
so prompt changes show up as plain string diffs in tests. Items render in
the order given and nothing time-dependent is embedded.
"""

from typing import Optional, Sequence

from models.inventory import InventoryItem
from models.advisory import SectionMarker
from utils.text_utils import format_number, format_optional

DEFAULT_LANGUAGE = "English"
DEFAULT_GOAL = "Not specified, plan a balanced varied menu"
DEFAULT_CAPACITY = "unknown"
EMPTY_INVENTORY_LINE = "- (no items recorded)"

# Section headings and what each one must contain, in output order.
WEEKLY_PLAN_SECTIONS = (
    (SectionMarker.WEEK_MENU, "as a Markdown table, 7 days x lunch/dinner"),
    (SectionMarker.PURCHASE_LIST, "with quantities and units"),
    (SectionMarker.REMINDERS, "3 lines at most"),
)


def _advice_line(item: InventoryItem) -> str:
    return (
        f"- {item.name}: {format_number(item.remaining)}% left"
        f" | keeps about {format_number(item.shelf_life)} days"
        f" | expires {format_optional(item.expiry, 'not set')}"
        f" | unit price about ${format_number(item.price)}"
    )


def _plan_line(item: InventoryItem) -> str:
    return (
        f"- {item.name}: {format_number(item.remaining)}% left"
        f" | keeps {format_number(item.shelf_life)} days"
        f" | price ${format_number(item.price)}"
    )


def _inventory_block(items: Sequence[InventoryItem], render) -> str:
    if not items:
        return EMPTY_INVENTORY_LINE
    return "\n".join(render(item) for item in items)


def build_advice_prompt(
    question: str,
    items: Sequence[InventoryItem],
    language: str = DEFAULT_LANGUAGE
) -> str:
    """
    Render the general cooking-advice prompt.

    Args:
        question: User's free-text question
        items: Inventory snapshot (shelf life already refreshed)
        language: Language the answer must be written in

    Returns:
        Prompt text
    """
    return f"""You are a friendly but precise fridge cooking advisor. Base every suggestion directly on the fridge inventory below.
Answer in {language} as a clear itemized list. Do not ask the user to list their fridge contents and do not ask any questions back.

[User question]
{question.strip()}

[Fridge inventory]
{_inventory_block(items, _advice_line)}

Follow these rules:
1. If the question is about planning meals or recipes, suggest concrete dishes straight from the inventory above (3 to 5 dishes, naming the main ingredients).
2. Prioritize items with little remaining or few days of shelf life.
3. Keep the answer short and practical: no filler, no pleasantries, no questions for the user.
"""


def build_weekly_plan_prompt(
    goal: Optional[str],
    capacity: Optional[str],
    items: Sequence[InventoryItem],
    language: str = DEFAULT_LANGUAGE
) -> str:
    """
    Render the weekly menu planning prompt.

    The model is told to write exactly the SectionMarker headings, in
    order, which is what the response parser splits on.

    Args:
        goal: Dietary goal or preference (optional)
        capacity: Fridge slots currently used (optional)
        items: Inventory snapshot (shelf life already refreshed)
        language: Language the answer must be written in

    Returns:
        Prompt text
    """
    sections = "\n".join(
        f"{marker.value} ({requirement})"
        for marker, requirement in WEEKLY_PLAN_SECTIONS
    )

    return f"""You are a professional smart-fridge menu planner. Answer in {language} using bullet lists and tables, with no extra conversation.

[User preference]
{format_optional(goal, DEFAULT_GOAL)}

[Fridge capacity]
Slots currently used: {format_optional(capacity, DEFAULT_CAPACITY)}. Do not exceed the capacity, and use items close to expiry first.

[Inventory status]
{_inventory_block(items, _plan_line)}

Output exactly these three sections, in this order, each starting with its heading written exactly as shown:
{sections}
"""
