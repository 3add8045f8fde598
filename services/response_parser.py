"""
Advisory response parser.

Splits a generated weekly plan into its sections by the SectionMarker
headings. Models do not always follow the requested format, so a missing
heading gives an empty section rather than an error.
"""

from models.advisory import SectionMarker, AdvisorySections


def extract_section(text: str, marker: SectionMarker) -> str:
    """
    Text between a marker and the next marker of any kind (or the end).

    Markers are matched as full strings; the first occurrence wins.

    Args:
        text: Generated answer
        marker: Section heading to extract

    Returns:
        Trimmed section body, or "" if the marker does not occur
    """
    start = text.find(marker.value)
    if start == -1:
        return ""
    start += len(marker.value)

    end = len(text)
    for other in SectionMarker:
        position = text.find(other.value, start)
        if position != -1 and position < end:
            end = position

    return text[start:end].strip()


def parse_sections(text: str) -> AdvisorySections:
    """Extract all three sections from a generated weekly plan."""
    return AdvisorySections(
        week_menu=extract_section(text, SectionMarker.WEEK_MENU),
        purchase_list=extract_section(text, SectionMarker.PURCHASE_LIST),
        reminders=extract_section(text, SectionMarker.REMINDERS),
    )
