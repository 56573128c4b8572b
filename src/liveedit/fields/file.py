"""File upload component editor state."""

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


class FileEvent(Enum):
    LABEL = "label"
    PAGE_HEADING = "page_heading"
    SHORT_NAME = "short_name"
    HELP_TEXT = "help_text"
    ERROR_SHORT_NAME = "error_short_name"
    ERROR_MESSAGE = "error_message"
    LABEL_SIZE = "label_size"
    OPTIONAL = "optional"


class FileState(LabelledState):
    error_short_name: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    label_size: Optional[str] = None
    optional: bool = False


_TEXT_EVENTS = {
    FileEvent.LABEL: "label",
    FileEvent.SHORT_NAME: "short_name",
    FileEvent.HELP_TEXT: "help_text",
    FileEvent.ERROR_SHORT_NAME: "error_short_name",
    FileEvent.ERROR_MESSAGE: "error_message",
}

_VALUE_EVENTS = {
    FileEvent.LABEL_SIZE: "label_size",
    FileEvent.OPTIONAL: "optional",
}


@reducer
def reduce_file(state: FileState, action: Action) -> Changes:
    match action.event:
        case FileEvent.PAGE_HEADING:
            return page_heading_changes(action)
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def initial_file_state(component: FormComponent) -> FileState:
    component = component.model_copy(deep=True)
    state = FileState(
        label=component.label,
        page_heading=component.label is None,
        help_text=component.help_text,
        short_name=component.short_name,
        error_short_name=component.error_short_name,
        error_message=component.error_message,
        label_size=component.label_size,
        optional=is_optional(component.mandatory),
    )
    return with_baseline(state)


def file_payload(state: FileState, component_id: str) -> dict[str, Any]:
    payload = labelled_payload(state, component_id)
    payload.update(
        {
            "errorShortName": to_wire(state.error_short_name),
            "errorMessage": to_wire(state.error_message),
            "labelSize": state.label_size,
            "mandatory": encode_mandatory(state.optional),
        }
    )
    return compact(payload)
