"""Summary section editor state."""

from enum import Enum
from typing import Any, Optional

from ..consts import DISPLAY_WIDTHS, KEY_DISPLAY_WIDTHS
from ..models import SummarySection
from ..smart_string import SmartString, to_wire
from .base import Action, Changes, FieldState, compact, reducer, shared_changes, with_baseline


class SummaryEvent(Enum):
    TITLE = "title"
    HEADER = "header"
    FOOTER = "footer"
    CONTINUE_LABEL = "continue_label"
    DISPLAY_WIDTH = "display_width"
    KEY_DISPLAY_WIDTH = "key_display_width"


class SummaryState(FieldState):
    title: Optional[SmartString] = None
    header: Optional[SmartString] = None
    footer: Optional[SmartString] = None
    continue_label: Optional[SmartString] = None
    display_width: Optional[str] = None
    key_display_width: Optional[str] = None


_TEXT_EVENTS = {
    SummaryEvent.TITLE: "title",
    SummaryEvent.HEADER: "header",
    SummaryEvent.FOOTER: "footer",
    SummaryEvent.CONTINUE_LABEL: "continue_label",
}


def _width(value: Any, allowed: tuple[str, ...]) -> str:
    width = value or ""
    if width not in allowed:
        raise ValueError(f"Unknown display width {width!r}, expected one of {allowed}")
    return width


@reducer
def reduce_summary(state: SummaryState, action: Action) -> Changes:
    match action.event:
        case SummaryEvent.DISPLAY_WIDTH:
            return {"display_width": _width(action.content, DISPLAY_WIDTHS)}
        case SummaryEvent.KEY_DISPLAY_WIDTH:
            return {"key_display_width": _width(action.content, KEY_DISPLAY_WIDTHS)}
        case _:
            return shared_changes(state, action, _TEXT_EVENTS)


def initial_summary_state(summary: SummarySection) -> SummaryState:
    summary = summary.model_copy(deep=True)
    state = SummaryState(
        title=summary.title,
        header=summary.header,
        footer=summary.footer,
        continue_label=summary.continue_label,
        display_width=summary.display_width,
        key_display_width=summary.key_display_width,
    )
    return with_baseline(state)


def summary_payload(state: SummaryState) -> dict[str, Any]:
    return compact(
        {
            "title": to_wire(state.title),
            "header": to_wire(state.header),
            "footer": to_wire(state.footer),
            "continueLabel": to_wire(state.continue_label),
            "displayWidth": state.display_width,
            "keyDisplayWidth": state.key_display_width,
        }
    )
