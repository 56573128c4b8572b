"""Sticky notes that editors pin on sections, summaries and templates."""

from enum import Enum
from typing import Any, Optional

from ..consts import NOTE_COLORS, NOTE_DEFAULT_POSITION, NOTE_DEFAULT_SIZE, NOTE_Z_INDEX_BASE, NOTE_Z_INDEX_FLOOR
from ..enums import NoteKind
from ..models import NoteInfo, Position, Size
from .base import Action, Changes, FieldState, reducer, replace_at


class NoteEvent(Enum):
    NOTE_TEXT = "note_text"
    POSITION = "position"
    SIZE = "size"
    COLOR = "color"
    Z_INDEX = "z_index"
    DELETE = "delete"
    ADD = "add"


class NoteItem(NoteInfo):
    is_deleted: bool = False


class NoteState(FieldState):
    notes: list[NoteItem] = []
    done_notes: list[str] = []


def next_z_index(notes: list[NoteItem]) -> int:
    """One above the top note; notes at or below the floor count as the base."""
    return max(
        (n.z_index if n.z_index > NOTE_Z_INDEX_FLOOR else NOTE_Z_INDEX_BASE for n in notes),
        default=NOTE_Z_INDEX_BASE,
    ) + 1


def _update_note(state: NoteState, index: int, **changes: Any) -> list[NoteItem]:
    return replace_at(state.notes, index, state.notes[index].model_copy(update=changes))


@reducer
def reduce_note(state: NoteState, action: Action) -> Changes:
    index = action.index
    match action.event:
        case NoteEvent.NOTE_TEXT:
            return {"notes": _update_note(state, index, note_text=action.content)}
        case NoteEvent.POSITION:
            return {"notes": _update_note(state, index, position=Position.model_validate(action.content))}
        case NoteEvent.SIZE:
            return {"notes": _update_note(state, index, size=Size.model_validate(action.content))}
        case NoteEvent.COLOR:
            return {"notes": _update_note(state, index, color=action.content)}
        case NoteEvent.Z_INDEX:
            z_index = next_z_index(state.notes)
            if state.notes[index].z_index + 1 >= z_index:
                # already on top
                return None
            return {"notes": _update_note(state, index, z_index=z_index)}
        case NoteEvent.DELETE:
            note = state.notes[index]
            return {
                "notes": _update_note(state, index, is_deleted=True),
                "done_notes": [*state.done_notes, note.note_text],
            }
        case NoteEvent.ADD:
            note = NoteItem(
                note_text="",
                position=Position(x=NOTE_DEFAULT_POSITION[0], y=NOTE_DEFAULT_POSITION[1]),
                size=Size(width=NOTE_DEFAULT_SIZE[0], height=NOTE_DEFAULT_SIZE[1]),
                color=NOTE_COLORS["yellow"],
                z_index=next_z_index(state.notes),
            )
            return {"notes": [*state.notes, note]}
        case _:
            return None


def initial_note_state(notes: list[NoteInfo], done_notes: list[str]) -> NoteState:
    return NoteState(
        notes=[NoteItem(**note.model_dump()) for note in notes],
        done_notes=list(done_notes),
    )


def note_payload(
    state: NoteState,
    kind: NoteKind,
    form_template_id: str = "",
    section_path: str = "",
) -> Optional[dict[str, Any]]:
    """Payload saving the live notes, or None when there is nothing to save."""
    if not state.notes and not state.done_notes:
        return None

    part = {
        "note": [
            note.model_dump(by_alias=True, exclude={"is_deleted"})
            for note in state.notes
            if not note.is_deleted
        ],
        "doneNote": list(state.done_notes),
    }

    match kind:
        case NoteKind.SECTION:
            return {"section": part, "sectionPath": section_path}
        case NoteKind.FORM_TEMPLATE:
            return {"formTemplate": {"_id": form_template_id, **part}}
        case _:
            return part
