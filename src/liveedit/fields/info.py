"""Info panel component editor state."""

from enum import Enum
from typing import Any, Optional

from ..models import FormComponent
from ..smart_string import SmartString, to_wire
from .base import Action, Changes, FieldState, compact, reducer, shared_changes, with_baseline


class InfoEvent(Enum):
    LABEL = "label"
    INFO_TEXT = "info_text"
    INFO_TYPE = "info_type"


class InfoState(FieldState):
    label: Optional[SmartString] = None
    info_text: Optional[SmartString] = None
    info_type: Optional[str] = None


@reducer
def reduce_info(state: InfoState, action: Action) -> Changes:
    return shared_changes(
        state,
        action,
        {InfoEvent.LABEL: "label", InfoEvent.INFO_TEXT: "info_text"},
        {InfoEvent.INFO_TYPE: "info_type"},
    )


def initial_info_state(component: FormComponent) -> InfoState:
    component = component.model_copy(deep=True)
    state = InfoState(
        label=component.label,
        info_text=component.info_text,
        info_type=component.info_type,
    )
    return with_baseline(state)


def info_payload(state: InfoState, component_id: str) -> dict[str, Any]:
    return compact(
        {
            "id": component_id,
            "label": to_wire(state.label),
            "infoText": to_wire(state.info_text),
            "infoType": state.info_type,
        }
    )
