"""Text component editor state."""

import logging
import re
from enum import Enum
from typing import Any, Optional

from ..consts import (
    DEFAULT_LOOKUP,
    FORMAT_FAMILIES,
    FORMAT_PARAM_DEFAULTS,
    FORMAT_PARAMS_PATTERN,
    REFERENCE_NUMBER_PARAMS,
)
from ..models import FormComponent
from ..smart_string import SmartString, to_wire
from ..utils import is_optional, parse_non_negative
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

logger = logging.getLogger(__name__)


class TextEvent(Enum):
    LABEL = "label"
    PAGE_HEADING = "page_heading"
    HELP_TEXT = "help_text"
    SHORT_NAME = "short_name"
    FORMAT = "format"
    FORMAT_PARAM1 = "format_param1"
    FORMAT_PARAM1_CHANGE = "format_param1_change"
    FORMAT_PARAM2 = "format_param2"
    FORMAT_PARAM2_CHANGE = "format_param2_change"
    ERROR_SHORT_NAME = "error_short_name"
    ERROR_SHORT_NAME_START = "error_short_name_start"
    ERROR_EXAMPLE = "error_example"
    ERROR_MESSAGE = "error_message"
    DISPLAY_WIDTH = "display_width"
    LABEL_SIZE = "label_size"
    OPTIONAL = "optional"
    IS_LOOKUP = "is_lookup"
    LOOKUP = "lookup"
    IS_MULTILINE = "is_multiline"


class TextState(LabelledState):
    format: str = ""
    format_param1: str = ""
    format_param2: str = ""
    error_short_name: Optional[SmartString] = None
    error_short_name_start: Optional[SmartString] = None
    error_example: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    display_width: Optional[str] = None
    label_size: Optional[str] = None
    optional: bool = False
    is_lookup: bool = False
    lookup: str = DEFAULT_LOOKUP
    is_multiline: bool = False


_TEXT_EVENTS = {
    TextEvent.LABEL: "label",
    TextEvent.HELP_TEXT: "help_text",
    TextEvent.SHORT_NAME: "short_name",
    TextEvent.ERROR_SHORT_NAME: "error_short_name",
    TextEvent.ERROR_SHORT_NAME_START: "error_short_name_start",
    TextEvent.ERROR_EXAMPLE: "error_example",
    TextEvent.ERROR_MESSAGE: "error_message",
}

_VALUE_EVENTS = {
    TextEvent.DISPLAY_WIDTH: "display_width",
    TextEvent.LABEL_SIZE: "label_size",
    TextEvent.OPTIONAL: "optional",
    TextEvent.IS_LOOKUP: "is_lookup",
    TextEvent.LOOKUP: "lookup",
    TextEvent.IS_MULTILINE: "is_multiline",
}


def extract_format_params(fmt: str) -> tuple[str, str]:
    """Read ``(min, max)`` from formats like ``text(1, 100)``."""
    m = re.search(FORMAT_PARAMS_PATTERN, fmt)
    if m:
        return m.group(1), m.group(2)
    return "", ""


def extract_format_prefix(fmt: str) -> str:
    return fmt.split("(", 1)[0]


def keeps_format_params(old: str, new: str) -> bool:
    return any(old in family and new in family and old != new for family in FORMAT_FAMILIES)


def consistent_format_params(
    param1: str, param2: str, default1: str, default2: str
) -> tuple[str, str]:
    """Keep a pair of format bounds complete.

    A lone bound equal to its default clears both, any other lone bound gets
    its partner's default.
    """
    if (not param2 and param1 == default1) or (not param1 and param2 == default2):
        return "", ""
    if param2 and not param1:
        return default1, param2
    if param1 and not param2:
        return param1, default2
    return param1, param2


def _param_change(state: TextState, param1: str, param2: str, changed: int) -> Changes:
    if state.format in FORMAT_PARAM_DEFAULTS:
        default1, default2 = FORMAT_PARAM_DEFAULTS[state.format]
        p1, p2 = consistent_format_params(param1, param2, default1, default2)
        return {"format_param1": p1, "format_param2": p2}

    if state.format == "referenceNumber":
        if changed == 1:
            return {"format_param1": param1 or REFERENCE_NUMBER_PARAMS[0]}
        return {"format_param2": param2 or REFERENCE_NUMBER_PARAMS[1]}

    # Other formats take no bounds; the commit still refreshes the component
    return {"format_param1": state.format_param1, "format_param2": state.format_param2}


@reducer
def reduce_text(state: TextState, action: Action) -> Changes:
    match action.event:
        case TextEvent.PAGE_HEADING:
            return page_heading_changes(action)
        case TextEvent.FORMAT:
            new_format = action.content
            if new_format == "referenceNumber":
                p1, p2 = REFERENCE_NUMBER_PARAMS
                return {"format": new_format, "format_param1": p1, "format_param2": p2}
            if keeps_format_params(state.format, new_format):
                return {"format": new_format}
            return {"format": new_format, "format_param1": "", "format_param2": ""}
        case TextEvent.FORMAT_PARAM1:
            return {"format_param1": parse_non_negative(str(action.content))}
        case TextEvent.FORMAT_PARAM2:
            return {"format_param2": parse_non_negative(str(action.content))}
        case TextEvent.FORMAT_PARAM1_CHANGE:
            param1 = parse_non_negative(str(action.content))
            return _param_change(state, param1, state.format_param2, 1)
        case TextEvent.FORMAT_PARAM2_CHANGE:
            param2 = parse_non_negative(str(action.content))
            return _param_change(state, state.format_param1, param2, 2)
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def initial_text_state(component: FormComponent) -> TextState:
    component = component.model_copy(deep=True)
    raw_format = component.format or ""
    param1, param2 = extract_format_params(raw_format)
    is_lookup = raw_format.startswith("lookup")

    state = TextState(
        label=component.label,
        page_heading=component.label is None,
        help_text=component.help_text,
        short_name=component.short_name,
        format="text" if is_lookup else extract_format_prefix(raw_format),
        format_param1=param1,
        format_param2=param2,
        error_short_name=component.error_short_name,
        error_short_name_start=component.error_short_name_start,
        error_example=component.error_example,
        error_message=component.error_message,
        display_width=component.display_width,
        label_size=component.label_size,
        optional=is_optional(component.mandatory),
        is_lookup=is_lookup,
        lookup=raw_format if is_lookup else DEFAULT_LOOKUP,
        is_multiline=component.multiline == "true",
    )
    return with_baseline(state)


def _format_value(state: TextState) -> str:
    if state.is_lookup:
        return state.lookup
    if state.format_param1 != "" and state.format_param2 != "":
        return f"{state.format}({state.format_param1},{state.format_param2})"
    return state.format


def _multiline_value(state: TextState) -> Any:
    if state.is_multiline:
        return True
    if state.is_lookup:
        return False
    return ""


def text_payload(state: TextState, component_id: str) -> dict[str, Any]:
    payload = labelled_payload(state, component_id)
    payload.update(
        {
            "format": _format_value(state),
            "multiline": _multiline_value(state),
            "errorShortName": to_wire(state.error_short_name),
            "errorShortNameStart": to_wire(state.error_short_name_start),
            "errorExample": to_wire(state.error_example),
            "errorMessage": to_wire(state.error_message),
            "displayWidth": state.display_width,
            "labelSize": state.label_size,
            "mandatory": encode_mandatory(state.optional),
        }
    )
    return compact(payload)
