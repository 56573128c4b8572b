"""Choice component editor state (radios, checkboxes, yes/no)."""

import copy
from enum import Enum
from typing import Any, Optional, Union

from ..consts import EMPTY_CHOICE_PLACEHOLDER, YES_NO_CHOICES
from ..enums import ChoiceType
from ..models import FormComponent
from ..smart_string import SmartString, english_only, to_wire
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
    replace_at,
    shared_changes,
    with_baseline,
)


class ChoiceEvent(Enum):
    TYPE = "type"
    LABEL = "label"
    PAGE_HEADING = "page_heading"
    HELP_TEXT = "help_text"
    SHORT_NAME = "short_name"
    CHOICE = "choice"
    HINT = "hint"
    INCLUDE_IF = "include_if"
    DIVIDER_POSITION = "divider_position"
    DIVIDER_TEXT = "divider_text"
    NONE_CHOICE = "none_choice"
    NONE_CHOICE_ERROR = "none_choice_error"
    ERROR_SHORT_NAME = "error_short_name"
    ERROR_MESSAGE = "error_message"
    OPTIONAL = "optional"


class ChoiceState(LabelledState):
    type_value: ChoiceType = ChoiceType.RADIOS
    choices: list[str] = []
    hints: list[Any] = []
    values: list[str] = []
    include_ifs: list[str] = []
    error_short_name: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    optional: bool = False
    divider_position: Optional[Union[int, str]] = None
    divider_text: Optional[SmartString] = None
    none_choice: Optional[Union[int, str]] = None
    none_choice_error: Optional[SmartString] = None


_TEXT_EVENTS = {
    ChoiceEvent.LABEL: "label",
    ChoiceEvent.HELP_TEXT: "help_text",
    ChoiceEvent.SHORT_NAME: "short_name",
    ChoiceEvent.DIVIDER_TEXT: "divider_text",
    ChoiceEvent.NONE_CHOICE_ERROR: "none_choice_error",
    ChoiceEvent.ERROR_SHORT_NAME: "error_short_name",
    ChoiceEvent.ERROR_MESSAGE: "error_message",
}

_VALUE_EVENTS = {
    ChoiceEvent.OPTIONAL: "optional",
}


def _choices_after_type_change(state: ChoiceState, new_type: ChoiceType) -> list[str]:
    # Yes/no keeps the custom choices aside; its payload never sends them
    if state.type_value is not ChoiceType.YES_NO or new_type is ChoiceType.YES_NO:
        return state.choices
    if state.choices:
        return copy.deepcopy(state.choices)
    return list(YES_NO_CHOICES)


def _none_choice(state: ChoiceState, action: Action) -> Union[int, str]:
    if action.content is not True:
        return ""
    # The designator is 1-based and names the choice value when there is one
    index = action.index
    value = state.values[index - 1] if 0 < index <= len(state.values) else ""
    return value if value else index


@reducer
def reduce_choice(state: ChoiceState, action: Action) -> Changes:
    match action.event:
        case ChoiceEvent.TYPE:
            new_type = ChoiceType(action.content)
            return {"type_value": new_type, "choices": _choices_after_type_change(state, new_type)}
        case ChoiceEvent.PAGE_HEADING:
            return page_heading_changes(action)
        case ChoiceEvent.CHOICE:
            return {"choices": replace_at(state.choices, action.index, action.content)}
        case ChoiceEvent.HINT:
            return {"hints": replace_at(state.hints, action.index, action.content)}
        case ChoiceEvent.INCLUDE_IF:
            return {"include_ifs": replace_at(state.include_ifs, action.index, action.content)}
        case ChoiceEvent.DIVIDER_POSITION:
            return {"divider_position": action.index if action.content is True else ""}
        case ChoiceEvent.NONE_CHOICE:
            return {"none_choice": _none_choice(state, action)}
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def _choice_objects(component: FormComponent) -> list[Any]:
    return component.choices if isinstance(component.choices, list) else []


def _choice_text(choice: Any) -> str:
    text = choice if isinstance(choice, str) else choice.get("en", "")
    return "" if text == EMPTY_CHOICE_PLACEHOLDER else text


def _choice_hint(choice: Any, index: int, standalone: Any) -> Any:
    if isinstance(standalone, list) and index < len(standalone) and isinstance(standalone[index], str):
        return standalone[index]
    hint = None if isinstance(choice, str) else choice.get("hint")
    return "" if hint is None else english_only(hint)


def _choice_type(component: FormComponent) -> ChoiceType:
    if component.format == ChoiceType.YES_NO.value:
        return ChoiceType.YES_NO
    if component.multivalue == "true":
        return ChoiceType.CHECKBOXES
    return ChoiceType.RADIOS


def initial_choice_state(component: FormComponent) -> ChoiceState:
    component = component.model_copy(deep=True)
    choices = _choice_objects(component)

    state = ChoiceState(
        type_value=_choice_type(component),
        label=component.label,
        page_heading=component.label is None,
        help_text=component.help_text,
        short_name=component.short_name,
        choices=[_choice_text(c) for c in choices],
        hints=[_choice_hint(c, i, component.hints) for i, c in enumerate(choices)],
        values=["" if isinstance(c, str) else c.get("value") or "" for c in choices],
        include_ifs=["" if isinstance(c, str) else c.get("includeIf") or "" for c in choices],
        error_short_name=component.error_short_name,
        error_message=component.error_message,
        optional=is_optional(component.mandatory),
        divider_position=component.divider_position if isinstance(component.divider_position, int) else None,
        divider_text=component.divider_text,
        none_choice=component.none_choice,
        none_choice_error=component.none_choice_error,
    )
    return with_baseline(state)


def _choice_update(state: ChoiceState, text: str, index: int) -> dict[str, Any]:
    update: dict[str, Any] = {"en": text or EMPTY_CHOICE_PLACEHOLDER}
    hint = state.hints[index] if index < len(state.hints) else ""
    if hint:
        update["hint"] = hint
    include_if = state.include_ifs[index] if index < len(state.include_ifs) else ""
    if include_if:
        update["includeIf"] = include_if
    return update


def choice_payload(state: ChoiceState, component_id: str) -> dict[str, Any]:
    payload = labelled_payload(state, component_id)

    if state.choices:
        choices: Any = [_choice_update(state, text, i) for i, text in enumerate(state.choices)]
    else:
        choices = list(YES_NO_CHOICES)

    has_divider = isinstance(state.divider_position, int) and not isinstance(state.divider_position, bool)
    payload.update(
        {
            "choices": choices,
            "errorShortName": to_wire(state.error_short_name),
            "errorMessage": to_wire(state.error_message),
            "mandatory": encode_mandatory(state.optional),
            "dividerPosition": state.divider_position,
            "dividerText": to_wire(state.divider_text) if has_divider else "",
        }
    )

    match state.type_value:
        case ChoiceType.YES_NO:
            payload.update(
                {
                    "format": ChoiceType.YES_NO.value,
                    "choices": "",
                    "multivalue": "",
                    "noneChoice": "",
                    "noneChoiceError": "",
                    "dividerPosition": "",
                    "dividerText": "",
                }
            )
        case ChoiceType.RADIOS:
            payload.update({"format": "", "multivalue": "", "noneChoice": "", "noneChoiceError": ""})
        case ChoiceType.CHECKBOXES:
            payload.update({"format": "", "multivalue": "true"})
            if state.none_choice != "":
                payload["noneChoice"] = state.none_choice
                payload["noneChoiceError"] = to_wire(state.none_choice_error)
            else:
                payload["noneChoice"] = ""
                payload["noneChoiceError"] = ""

    return compact(payload)
