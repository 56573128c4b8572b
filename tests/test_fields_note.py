"""Tests for sticky note state."""

import pytest

from liveedit.enums import NoteKind
from liveedit.fields.base import Action
from liveedit.fields.note import NoteEvent, initial_note_state, next_z_index, note_payload, reduce_note
from liveedit.models import NoteInfo, parse_notes


@pytest.fixture
def state():
    return initial_note_state([NoteInfo(note_text="Check wording", z_index=1000001)], [])


class TestReduce:
    """Test note reducer transitions."""

    def test_add_note_on_top(self, state):
        new = reduce_note(state, Action.component(NoteEvent.ADD))
        assert len(new.notes) == 2
        assert new.notes[1].note_text == ""
        assert new.notes[1].z_index == 1000002

    def test_delete_moves_text_to_done(self, state):
        new = reduce_note(state, Action.component(NoteEvent.DELETE, index=0))
        assert new.notes[0].is_deleted is True
        assert new.done_notes == ["Check wording"]

    def test_bring_to_front_when_on_top_is_no_change(self, state):
        assert reduce_note(state, Action.component(NoteEvent.Z_INDEX, index=0)) is state

    def test_bring_to_front(self, state):
        state = reduce_note(state, Action.component(NoteEvent.ADD))
        new = reduce_note(state, Action.component(NoteEvent.Z_INDEX, index=0))
        assert new.notes[0].z_index == 1000003

    def test_move(self, state):
        new = reduce_note(state, Action.component(NoteEvent.POSITION, {"x": 5, "y": 6}, index=0))
        assert (new.notes[0].position.x, new.notes[0].position.y) == (5, 6)

    def test_next_z_index_of_low_notes(self):
        assert next_z_index([]) == 1000001


class TestPayload:
    """Test note payload shapes per note kind."""

    def test_nothing_to_save(self):
        assert note_payload(initial_note_state([], []), NoteKind.SECTION) is None

    def test_section_payload(self, state):
        payload = note_payload(state, NoteKind.SECTION, section_path=".sections[2]")
        assert payload["sectionPath"] == ".sections[2]"
        assert payload["section"]["doneNote"] == []
        assert payload["section"]["note"][0]["noteText"] == "Check wording"

    def test_form_template_payload(self, state):
        payload = note_payload(state, NoteKind.FORM_TEMPLATE, form_template_id="ft1")
        assert payload["formTemplate"]["_id"] == "ft1"

    def test_deleted_notes_left_out(self, state):
        new = reduce_note(state, Action.component(NoteEvent.DELETE, index=0))
        payload = note_payload(new, NoteKind.SUMMARY_SECTION)
        assert payload == {"note": [], "doneNote": ["Check wording"]}


def test_parse_legacy_string_note():
    notes = parse_notes("Remember this")
    assert len(notes) == 1
    assert notes[0].note_text == "Remember this"
