"""Field kinds and their reducers."""

from dataclasses import dataclass
from typing import Any, Callable

from ..enums import TargetKind
from ..errors import UnsupportedFieldException
from ..models import FormComponent
from .address import AddressEvent, AddressState, address_payload, initial_address_state, reduce_address
from .base import Action, FieldState
from .choice import ChoiceEvent, ChoiceState, choice_payload, initial_choice_state, reduce_choice
from .date import DateEvent, DateState, date_payload, initial_date_state, reduce_date
from .file import FileEvent, FileState, file_payload, initial_file_state, reduce_file
from .info import InfoEvent, InfoState, info_payload, initial_info_state, reduce_info
from .note import NoteEvent, NoteState, initial_note_state, note_payload, reduce_note
from .repeater import (
    AddAnotherQuestionEvent,
    AddAnotherQuestionState,
    RepeaterEvent,
    RepeaterState,
    add_another_question_payload,
    initial_add_another_question_state,
    initial_repeater_state,
    reduce_add_another_question,
    reduce_repeater,
    repeater_payload,
)
from .section import SectionEvent, SectionState, initial_section_state, reduce_section, section_payload
from .summary import SummaryEvent, SummaryState, initial_summary_state, reduce_summary, summary_payload
from .text import TextEvent, TextState, initial_text_state, reduce_text, text_payload


@dataclass(frozen=True)
class FieldKind:
    """The three operations an editor needs for one kind of component."""

    name: str
    initial_state: Callable[[FormComponent], FieldState]
    reduce: Callable[[FieldState, Action], FieldState]
    payload: Callable[[FieldState, str], dict[str, Any]]


TEXT = FieldKind("text", initial_text_state, reduce_text, text_payload)
CHOICE = FieldKind("choice", initial_choice_state, reduce_choice, choice_payload)
DATE = FieldKind("date", initial_date_state, reduce_date, date_payload)
ADDRESS = FieldKind("address", initial_address_state, reduce_address, address_payload)
FILE = FieldKind("file", initial_file_state, reduce_file, file_payload)
INFO = FieldKind("info", initial_info_state, reduce_info, info_payload)


@dataclass(frozen=True)
class PageKind:
    """A page level editor: one state saved to one target.

    ``success_field`` names the key of a render response that carries the
    refreshed content.
    """

    name: str
    target_kind: TargetKind
    reduce: Callable[[FieldState, Action], FieldState]
    payload: Callable[[FieldState], dict[str, Any]]
    success_field: str


REPEATER = PageKind("repeater", TargetKind.ATL_REPEATER, reduce_repeater, repeater_payload, "page_heading")
ADD_ANOTHER_QUESTION = PageKind(
    "add-another-question",
    TargetKind.ATL_REPEATER_ADD_ANOTHER_QUESTION,
    reduce_add_another_question,
    add_another_question_payload,
    "label",
)
SUMMARY_SECTION = PageKind("summary-section", TargetKind.SUMMARY_SECTION, reduce_summary, summary_payload, "title")


def get_field_kind(component_type: str) -> FieldKind:
    match component_type:
        case "text":
            return TEXT
        case "choice" | "revealingChoice":
            return CHOICE
        case "date":
            return DATE
        case "address" | "overseasAddress":
            return ADDRESS
        case "file":
            return FILE
        case "info":
            return INFO
        case _:
            raise UnsupportedFieldException(f"No editor for component type: {component_type}")


__all__ = [
    "ADDRESS",
    "ADD_ANOTHER_QUESTION",
    "CHOICE",
    "DATE",
    "FILE",
    "INFO",
    "REPEATER",
    "SUMMARY_SECTION",
    "TEXT",
    "Action",
    "AddAnotherQuestionEvent",
    "AddAnotherQuestionState",
    "AddressEvent",
    "AddressState",
    "ChoiceEvent",
    "ChoiceState",
    "DateEvent",
    "DateState",
    "FieldKind",
    "FieldState",
    "FileEvent",
    "FileState",
    "InfoEvent",
    "InfoState",
    "NoteEvent",
    "NoteState",
    "PageKind",
    "RepeaterEvent",
    "RepeaterState",
    "SectionEvent",
    "SectionState",
    "SummaryEvent",
    "SummaryState",
    "TextEvent",
    "TextState",
    "get_field_kind",
    "initial_add_another_question_state",
    "initial_note_state",
    "initial_repeater_state",
    "initial_section_state",
    "initial_summary_state",
    "note_payload",
    "reduce_note",
    "reduce_section",
    "section_payload",
]
