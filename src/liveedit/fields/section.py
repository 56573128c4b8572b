"""Section (page) editor state, shared by every component editor on a page."""

from enum import Enum
from typing import Any, Optional

from ..consts import INVISIBLE_PAGE_TITLE
from ..models import Section
from ..smart_string import SmartString, to_wire
from .base import Action, Changes, FieldState, compact, reducer, shared_changes, with_baseline


class SectionEvent(Enum):
    CAPTION = "caption"
    TITLE = "title"
    DESCRIPTION = "description"
    SHORT_NAME = "short_name"
    CONTINUE_LABEL = "continue_label"
    VISIBLE_IN_SUMMARY = "visible_in_summary"
    HIDDEN_IN_SUMMARY = "hidden_in_summary"


class SectionState(FieldState):
    caption: Optional[SmartString] = None
    title: Optional[SmartString] = None
    description: Optional[SmartString] = None
    short_name: Optional[SmartString] = None
    continue_label: Optional[SmartString] = None
    visible_in_summary: bool = True
    hidden_in_summary: bool = False


_TEXT_EVENTS = {
    SectionEvent.CAPTION: "caption",
    SectionEvent.TITLE: "title",
    SectionEvent.DESCRIPTION: "description",
    SectionEvent.SHORT_NAME: "short_name",
    SectionEvent.CONTINUE_LABEL: "continue_label",
}


@reducer
def reduce_section(state: SectionState, action: Action) -> Changes:
    match action.event:
        case SectionEvent.VISIBLE_IN_SUMMARY:
            return {"visible_in_summary": True, "hidden_in_summary": False}
        case SectionEvent.HIDDEN_IN_SUMMARY:
            return {"visible_in_summary": False, "hidden_in_summary": True}
        case _:
            return shared_changes(state, action, _TEXT_EVENTS)


def initial_section_state(section: Section) -> SectionState:
    section = section.model_copy(deep=True)
    hidden = section.presentation_hint == INVISIBLE_PAGE_TITLE
    state = SectionState(
        caption=section.caption,
        title=section.title,
        description=section.description,
        short_name=section.short_name,
        continue_label=section.continue_label,
        visible_in_summary=not hidden,
        hidden_in_summary=hidden,
    )
    # A description added through the editor must be removable by undo,
    # which needs "" rather than a missing value
    return with_baseline(state)


def section_payload(state: SectionState, section_path: str) -> dict[str, Any]:
    section = {
        "title": to_wire(state.title),
        "caption": to_wire(state.caption),
        "description": to_wire(state.description),
        "shortName": to_wire(state.short_name),
        "continueLabel": to_wire(state.continue_label),
        "presentationHint": INVISIBLE_PAGE_TITLE if state.hidden_in_summary else "",
    }
    return {"section": compact(section), "sectionPath": section_path}
