"""Add-to-list repeater page editor state.

The repeater asks whether to add another item. Besides its heading it owns
the add-to-list options and the optional default and check-your-answers
pages, which are added from a template and removed by sending "".
"""

import copy
from enum import Enum
from typing import Any, Optional

from ..consts import ATL_CYA_PAGE_TEMPLATE, ATL_DEFAULT_PAGE_TEMPLATE, INVISIBLE_PAGE_TITLE
from ..models import AddAnotherQuestion, AtlRepeater
from ..smart_string import SmartString, to_wire
from .base import Action, Changes, FieldState, compact, reducer, shared_changes, with_baseline


class RepeaterEvent(Enum):
    TITLE = "title"
    CAPTION = "caption"
    DESCRIPTION = "description"
    SHORT_NAME = "short_name"
    SUMMARY_NAME = "summary_name"
    SUMMARY_DESCRIPTION = "summary_description"
    REPEATS_WHILE = "repeats_while"
    REPEATS_UNTIL = "repeats_until"
    PAGE_ID_AFTER_REMOVE = "page_id_to_display_after_remove"
    VISIBLE_IN_SUMMARY = "visible_in_summary"
    HIDDEN_IN_SUMMARY = "hidden_in_summary"
    ADD_DEFAULT_PAGE = "add_default_page"
    DELETE_DEFAULT_PAGE = "delete_default_page"
    ADD_CYA_PAGE = "add_cya_page"
    DELETE_CYA_PAGE = "delete_cya_page"


class RepeaterState(FieldState):
    title: Optional[SmartString] = None
    caption: Optional[SmartString] = None
    description: Optional[SmartString] = None
    short_name: Optional[SmartString] = None
    summary_name: Optional[SmartString] = None
    summary_description: Optional[SmartString] = None
    repeats_while: Optional[str] = None
    repeats_until: Optional[str] = None
    page_id_to_display_after_remove: Optional[str] = None
    hidden_in_summary: bool = False
    default_page: Any = None
    cya_page: Any = None

    @property
    def has_default_page(self) -> bool:
        return bool(self.default_page)

    @property
    def has_cya_page(self) -> bool:
        return bool(self.cya_page)


_TEXT_EVENTS = {
    RepeaterEvent.TITLE: "title",
    RepeaterEvent.CAPTION: "caption",
    RepeaterEvent.DESCRIPTION: "description",
    RepeaterEvent.SHORT_NAME: "short_name",
    RepeaterEvent.SUMMARY_NAME: "summary_name",
    RepeaterEvent.SUMMARY_DESCRIPTION: "summary_description",
}

_VALUE_EVENTS = {
    RepeaterEvent.REPEATS_WHILE: "repeats_while",
    RepeaterEvent.REPEATS_UNTIL: "repeats_until",
    RepeaterEvent.PAGE_ID_AFTER_REMOVE: "page_id_to_display_after_remove",
}


@reducer
def reduce_repeater(state: RepeaterState, action: Action) -> Changes:
    match action.event:
        case RepeaterEvent.VISIBLE_IN_SUMMARY:
            return {"hidden_in_summary": False}
        case RepeaterEvent.HIDDEN_IN_SUMMARY:
            return {"hidden_in_summary": True}
        case RepeaterEvent.ADD_DEFAULT_PAGE:
            if state.has_default_page:
                return None
            return {"default_page": copy.deepcopy(ATL_DEFAULT_PAGE_TEMPLATE)}
        case RepeaterEvent.DELETE_DEFAULT_PAGE:
            return {"default_page": ""} if state.has_default_page else None
        case RepeaterEvent.ADD_CYA_PAGE:
            if state.has_cya_page:
                return None
            return {"cya_page": copy.deepcopy(ATL_CYA_PAGE_TEMPLATE)}
        case RepeaterEvent.DELETE_CYA_PAGE:
            return {"cya_page": ""} if state.has_cya_page else None
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def initial_repeater_state(repeater: AtlRepeater) -> RepeaterState:
    repeater = repeater.model_copy(deep=True)
    state = RepeaterState(
        title=repeater.title,
        caption=repeater.caption,
        description=repeater.description,
        short_name=repeater.short_name,
        summary_name=repeater.summary_name,
        summary_description=repeater.summary_description,
        repeats_while=repeater.repeats_while,
        repeats_until=repeater.repeats_until,
        page_id_to_display_after_remove=repeater.page_id_to_display_after_remove,
        hidden_in_summary=repeater.presentation_hint == INVISIBLE_PAGE_TITLE,
        default_page=repeater.default_page,
        cya_page=repeater.cya_page,
    )
    return with_baseline(state)


def repeater_payload(state: RepeaterState) -> dict[str, Any]:
    return compact(
        {
            "title": to_wire(state.title),
            "caption": to_wire(state.caption),
            "description": to_wire(state.description),
            "shortName": to_wire(state.short_name),
            "summaryName": to_wire(state.summary_name),
            "summaryDescription": to_wire(state.summary_description),
            "repeatsWhile": state.repeats_while,
            "repeatsUntil": state.repeats_until,
            "pageIdToDisplayAfterRemove": state.page_id_to_display_after_remove,
            "presentationHint": INVISIBLE_PAGE_TITLE if state.hidden_in_summary else "",
            "defaultPage": state.default_page,
            "cyaPage": state.cya_page,
        }
    )


class AddAnotherQuestionEvent(Enum):
    LABEL = "label"
    ERROR_MESSAGE = "error_message"


class AddAnotherQuestionState(FieldState):
    label: Optional[SmartString] = None
    error_message: Optional[SmartString] = None


@reducer
def reduce_add_another_question(state: AddAnotherQuestionState, action: Action) -> Changes:
    return shared_changes(
        state,
        action,
        {AddAnotherQuestionEvent.LABEL: "label", AddAnotherQuestionEvent.ERROR_MESSAGE: "error_message"},
    )


def initial_add_another_question_state(question: AddAnotherQuestion) -> AddAnotherQuestionState:
    question = question.model_copy(deep=True)
    return with_baseline(AddAnotherQuestionState(label=question.label, error_message=question.error_message))


def add_another_question_payload(state: AddAnotherQuestionState) -> dict[str, Any]:
    return compact({"label": to_wire(state.label), "errorMessage": to_wire(state.error_message)})
