"""Edit requests built from committed editor state."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .consts import MISSING_COMPONENT_ID
from .enums import NoteKind, TargetKind
from .fields import FieldKind, FieldState, NoteState, PageKind, SectionState, note_payload, section_payload
from .models import Coordinates, SectionNumber, ServerPageData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditRequest:
    """One update for the template service.

    The payload is a private deep copy taken when the request is built; later
    state changes never leak into a queued request.
    """

    target_kind: TargetKind
    form_template_id: str
    payload: dict[str, Any] = field(repr=False)
    section_number: Optional[SectionNumber] = None
    access_code: Optional[str] = None
    component_id: Optional[str] = None
    atl_iteration_index: Optional[int] = None
    section_path: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    section_number_after_update: Optional[SectionNumber] = None

    def __post_init__(self):
        object.__setattr__(self, "payload", copy.deepcopy(self.payload))


@dataclass(frozen=True)
class EditorContext:
    """Where an editor is mounted."""

    form_template_id: str
    section_number: SectionNumber
    section_path: str = ""
    access_code: Optional[str] = None
    atl_iteration_index: Optional[int] = None
    component_target: TargetKind = TargetKind.FORM_COMPONENT

    @classmethod
    def from_page(
        cls,
        form_template_id: str,
        section_number: SectionNumber,
        page: ServerPageData,
        access_code: Optional[str] = None,
    ) -> "EditorContext":
        if page.atl_repeater:
            target = TargetKind.ATL_REPEATER_COMPONENT
        elif page.atl_default_page:
            target = TargetKind.ATL_DEFAULT_PAGE_COMPONENT
        else:
            target = TargetKind.FORM_COMPONENT

        return cls(
            form_template_id=form_template_id,
            section_number=section_number,
            section_path=page.section_path,
            access_code=access_code,
            atl_iteration_index=page.atl_iteration_index,
            component_target=target,
        )


def build_component_request(
    kind: FieldKind,
    state: FieldState,
    component_id: str,
    context: EditorContext,
) -> EditRequest:
    payload = kind.payload(state, component_id)
    return EditRequest(
        target_kind=context.component_target,
        form_template_id=context.form_template_id,
        payload=payload,
        section_number=context.section_number,
        access_code=context.access_code,
        component_id=component_id or MISSING_COMPONENT_ID,
        atl_iteration_index=context.atl_iteration_index,
        section_path=context.section_path,
    )


def build_section_request(
    state: SectionState,
    component_id: str,
    context: EditorContext,
) -> EditRequest:
    """Section update, rendered together with the component it was edited from."""
    return EditRequest(
        target_kind=TargetKind.SECTION,
        form_template_id=context.form_template_id,
        payload=section_payload(state, context.section_path),
        section_number=context.section_number,
        access_code=context.access_code,
        component_id=component_id,
        section_path=context.section_path,
    )



def build_page_request(
    kind: PageKind,
    state: FieldState,
    form_template_id: str,
    section_number: Optional[SectionNumber] = None,
    section_path: str = "",
    access_code: Optional[str] = None,
    coordinates: Optional[Coordinates] = None,
) -> EditRequest:
    """Update for a page level editor, rendered back onto the same page."""
    return EditRequest(
        target_kind=kind.target_kind,
        form_template_id=form_template_id,
        payload=kind.payload(state),
        section_number=section_number,
        access_code=access_code,
        section_path=section_path,
        coordinates=coordinates,
        section_number_after_update=section_number,
    )


_NOTE_TARGETS = {
    NoteKind.SECTION: TargetKind.SECTION_NOTE,
    NoteKind.FORM_TEMPLATE: TargetKind.FORM_TEMPLATE,
    NoteKind.SUMMARY_SECTION: TargetKind.SUMMARY_SECTION_NOTE,
    NoteKind.ACKNOWLEDGEMENT: TargetKind.ACKNOWLEDGEMENT_NOTE,
    NoteKind.ATL_REPEATER: TargetKind.ATL_REPEATER_NOTE,
    NoteKind.ATL_DEFAULT_PAGE: TargetKind.ATL_DEFAULT_PAGE_NOTE,
    NoteKind.ATL_CYA_PAGE: TargetKind.ATL_CYA_PAGE_NOTE,
}


def build_note_request(
    state: NoteState,
    kind: NoteKind,
    form_template_id: str,
    section_path: str = "",
    coordinates: Optional[Coordinates] = None,
) -> Optional[EditRequest]:
    """Persist-only note update, None when there are no notes at all."""
    payload = note_payload(state, kind, form_template_id, section_path)
    if payload is None:
        logger.debug(f"No notes to save for {kind.value}")
        return None

    return EditRequest(
        target_kind=_NOTE_TARGETS[kind],
        form_template_id=form_template_id,
        payload=payload,
        section_path=section_path,
        coordinates=coordinates,
    )
