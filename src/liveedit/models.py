"""Data models for template service payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .consts import NOTE_COLORS, NOTE_DEFAULT_POSITION, NOTE_DEFAULT_SIZE
from .errors import SectionNumberParseError
from .smart_string import SmartString


# ==================== Section Numbers ====================


@dataclass(frozen=True)
class NormalPage:
    section_number: int

    def as_string(self) -> str:
        return f"n{self.section_number}"


@dataclass(frozen=True)
class AddToListDefaultPage:
    section_number: int

    def as_string(self) -> str:
        return f"ad{self.section_number}"


@dataclass(frozen=True)
class AddToListPage:
    section_number: int
    iteration_number: int
    page_number: int

    def as_string(self) -> str:
        return f"ap{self.section_number}.{self.iteration_number}.{self.page_number}"


@dataclass(frozen=True)
class AddToListCyaPage:
    section_number: int
    iteration_number: int

    def as_string(self) -> str:
        return f"ac{self.section_number}.{self.iteration_number}"


@dataclass(frozen=True)
class AddToListRepeaterPage:
    section_number: int
    iteration_number: int

    def as_string(self) -> str:
        return f"ar{self.section_number}.{self.iteration_number}"


@dataclass(frozen=True)
class RepeatedPage:
    section_number: int
    page_number: int

    def as_string(self) -> str:
        return f"r{self.section_number}.{self.page_number}"


@dataclass(frozen=True)
class TaskListSectionNumber:
    task_section_number: int
    task_number: int
    section_number: "SectionNumber"

    def as_string(self) -> str:
        return f"{self.task_section_number},{self.task_number},{self.section_number.as_string()}"


@dataclass(frozen=True)
class AcknowledgementSectionNumber:
    def as_string(self) -> str:
        return ""


SectionNumber = Union[
    NormalPage,
    AddToListDefaultPage,
    AddToListPage,
    AddToListCyaPage,
    AddToListRepeaterPage,
    RepeatedPage,
    TaskListSectionNumber,
    AcknowledgementSectionNumber,
]

_SECTION_NUMBER_PATTERNS = [
    (re.compile(r"^n(\d+)$"), NormalPage),
    (re.compile(r"^ad(\d+)$"), AddToListDefaultPage),
    (re.compile(r"^ap(\d+)\.(\d+)\.(\d+)$"), AddToListPage),
    (re.compile(r"^ac(\d+)\.(\d+)$"), AddToListCyaPage),
    (re.compile(r"^ar(\d+)\.(\d+)$"), AddToListRepeaterPage),
    (re.compile(r"^r(\d+)\.(\d+)$"), RepeatedPage),
]


def parse_section_number(value: str) -> SectionNumber:
    """Parse the string form used in service URLs.

    Examples:
        >>> parse_section_number("n3")
        NormalPage(section_number=3)
        >>> parse_section_number("1,2,ap0.1.2").as_string()
        '1,2,ap0.1.2'
    """
    value = value.strip()
    if value == "":
        return AcknowledgementSectionNumber()

    parts = value.split(",", 2)
    if len(parts) == 3:
        task_section, task, inner = parts
        if not (task_section.isdigit() and task.isdigit()):
            raise SectionNumberParseError(f"Invalid task list section number: {value}")
        return TaskListSectionNumber(int(task_section), int(task), parse_section_number(inner))

    for pattern, cls in _SECTION_NUMBER_PATTERNS:
        m = pattern.match(value)
        if m:
            return cls(*(int(g) for g in m.groups()))

    raise SectionNumberParseError(f"Invalid section number: {value}")


def is_task_list(section_number: SectionNumber) -> bool:
    return isinstance(section_number, TaskListSectionNumber)


@dataclass(frozen=True)
class Coordinates:
    """Position of a task inside a task list form."""

    task_section_number: int
    task_number: int

    def as_string(self) -> str:
        return f"{self.task_section_number},{self.task_number}"


# ==================== Server Payloads ====================


class ServiceModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class FormComponent(ServiceModel):
    """A form component as the template service describes it."""

    id: str
    type: str
    label: Optional[SmartString] = None
    short_name: Optional[SmartString] = None
    help_text: Optional[SmartString] = None
    format: Optional[str] = None
    error_short_name: Optional[SmartString] = None
    error_short_name_start: Optional[SmartString] = None
    error_example: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    display_width: Optional[str] = None
    label_size: Optional[str] = None
    mandatory: Optional[str] = None
    info_text: Optional[SmartString] = None
    info_type: Optional[str] = None
    multivalue: Optional[str] = None
    multiline: Optional[str] = None
    divider_position: Optional[Union[int, str]] = None
    divider_text: Optional[SmartString] = None
    none_choice: Optional[Union[int, str]] = None
    none_choice_error: Optional[SmartString] = None
    choices: Any = None
    hints: Any = None
    city_mandatory: Optional[str] = None
    county_displayed: Optional[str] = None
    line2_mandatory: Optional[str] = Field(default=None, alias="line2Mandatory")
    postcode_mandatory: Optional[str] = None
    country_lookup: Optional[str] = None
    country_displayed: Optional[str] = None

    @field_validator(
        "mandatory",
        "multivalue",
        "multiline",
        "city_mandatory",
        "county_displayed",
        "line2_mandatory",
        "postcode_mandatory",
        "country_lookup",
        "country_displayed",
        mode="before",
    )
    @classmethod
    def flag_as_string(cls, v: Any) -> Any:
        # Flags arrive both as JSON booleans and as "true"/"false" strings
        if isinstance(v, bool):
            return "true" if v else "false"
        return v


class Position(BaseModel):
    x: float
    y: float


class Size(BaseModel):
    width: float
    height: float


class NoteInfo(ServiceModel):
    note_text: str
    position: Position = Field(
        default_factory=lambda: Position(x=NOTE_DEFAULT_POSITION[0], y=NOTE_DEFAULT_POSITION[1])
    )
    size: Size = Field(
        default_factory=lambda: Size(width=NOTE_DEFAULT_SIZE[0], height=NOTE_DEFAULT_SIZE[1])
    )
    color: Optional[str] = NOTE_COLORS["yellow"]
    z_index: int = 1000


def parse_notes(raw: Any) -> list[NoteInfo]:
    """Read a note field, which older templates store as a plain string."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return [NoteInfo(note_text=raw)]
    return [NoteInfo.model_validate(item) for item in raw]


class Section(ServiceModel):
    title: Optional[SmartString] = None
    caption: Optional[SmartString] = None
    description: Optional[SmartString] = None
    short_name: Optional[SmartString] = None
    continue_label: Optional[SmartString] = None
    presentation_hint: Optional[str] = None
    note: Any = None
    done_note: list[str] = Field(default_factory=list)
    fields: list[FormComponent] = Field(default_factory=list)


class AddAnotherQuestion(ServiceModel):
    id: str
    label: Optional[SmartString] = None
    error_message: Optional[SmartString] = None


class AtlRepeater(Section):
    """The repeater page of an add-to-list, which decides whether to add another item."""

    summary_name: Optional[SmartString] = None
    summary_description: Optional[SmartString] = None
    repeats_while: Optional[str] = None
    repeats_until: Optional[str] = None
    page_id_to_display_after_remove: Optional[str] = None
    # "" on the wire removes the page
    default_page: Any = None
    cya_page: Any = None
    add_another_question: Optional[AddAnotherQuestion] = None


class SummarySection(ServiceModel):
    """The check-your-answers page of a form or of a task."""

    title: Optional[SmartString] = None
    header: Optional[SmartString] = None
    footer: Optional[SmartString] = None
    display_width: Optional[str] = None
    key_display_width: Optional[str] = None
    continue_label: Optional[SmartString] = None
    note: Any = None
    done_note: list[str] = Field(default_factory=list)
    fields: list[FormComponent] = Field(default_factory=list)


class ServerPageData(ServiceModel):
    """Section data returned by the original-section endpoint."""

    section: Section
    section_path: str
    atl_iteration_index: Optional[int] = None
    atl_repeater: bool = False
    atl_default_page: bool = False
    atl_cya_page: bool = False
    hidden_component_ids: list[str] = Field(default_factory=list)

    def repeater(self) -> AtlRepeater:
        """The section read as an add-to-list repeater."""
        if not self.atl_repeater:
            raise ValueError(f"Section {self.section_path} is not an add-to-list repeater")
        return AtlRepeater.model_validate(self.section.model_dump(by_alias=True, exclude_none=True))
