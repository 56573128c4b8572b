"""Date component editor state."""

from enum import Enum
from typing import Any, Optional

from ..models import FormComponent
from ..smart_string import SmartString, to_wire
from ..utils import is_optional
from .base import (
    Action,
    Changes,
    LabelledState,
    compact,
    encode_mandatory,
    labelled_payload,
    page_heading_changes,
    reducer,
    shared_changes,
    with_baseline,
)


class DateEvent(Enum):
    LABEL = "label"
    PAGE_HEADING = "page_heading"
    SHORT_NAME = "short_name"
    HELP_TEXT = "help_text"
    FORMAT = "format"
    ERROR_SHORT_NAME = "error_short_name"
    ERROR_SHORT_NAME_START = "error_short_name_start"
    ERROR_EXAMPLE = "error_example"
    ERROR_MESSAGE = "error_message"
    LABEL_SIZE = "label_size"
    OPTIONAL = "optional"


class DateState(LabelledState):
    format: Optional[str] = None
    error_short_name: Optional[SmartString] = None
    error_short_name_start: Optional[SmartString] = None
    error_example: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    label_size: Optional[str] = None
    optional: bool = False


_TEXT_EVENTS = {
    DateEvent.LABEL: "label",
    DateEvent.SHORT_NAME: "short_name",
    DateEvent.HELP_TEXT: "help_text",
    DateEvent.ERROR_SHORT_NAME: "error_short_name",
    DateEvent.ERROR_SHORT_NAME_START: "error_short_name_start",
    DateEvent.ERROR_EXAMPLE: "error_example",
    DateEvent.ERROR_MESSAGE: "error_message",
}

_VALUE_EVENTS = {
    DateEvent.FORMAT: "format",
    DateEvent.LABEL_SIZE: "label_size",
    DateEvent.OPTIONAL: "optional",
}


@reducer
def reduce_date(state: DateState, action: Action) -> Changes:
    match action.event:
        case DateEvent.PAGE_HEADING:
            return page_heading_changes(action)
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def initial_date_state(component: FormComponent) -> DateState:
    component = component.model_copy(deep=True)
    state = DateState(
        label=component.label,
        page_heading=component.label is None,
        help_text=component.help_text,
        short_name=component.short_name,
        format=component.format,
        error_short_name=component.error_short_name,
        error_short_name_start=component.error_short_name_start,
        error_example=component.error_example,
        error_message=component.error_message,
        label_size=component.label_size,
        optional=is_optional(component.mandatory),
    )
    return with_baseline(state)


def date_payload(state: DateState, component_id: str) -> dict[str, Any]:
    payload = labelled_payload(state, component_id)
    payload.update(
        {
            "format": state.format,
            "errorShortName": to_wire(state.error_short_name),
            "errorShortNameStart": to_wire(state.error_short_name_start),
            "errorExample": to_wire(state.error_example),
            "errorMessage": to_wire(state.error_message),
            "labelSize": state.label_size,
            "mandatory": encode_mandatory(state.optional),
        }
    )
    return compact(payload)
