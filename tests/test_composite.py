"""Tests for the composite section and component state."""

import pytest

from liveedit.composite import CompositeState, changed_halves, reduce_composite, restore
from liveedit.fields.base import Action
from liveedit.fields.section import SectionEvent, initial_section_state, section_payload
from liveedit.fields.text import TextEvent, initial_text_state, reduce_text
from liveedit.models import FormComponent, Section
from liveedit.utils import fill_missing


@pytest.fixture
def state():
    return CompositeState(
        section=initial_section_state(Section(title="About you")),
        component=initial_text_state(FormComponent(id="fullName", type="text", label="Full name")),
    )


class TestReduce:
    """Test routing actions to the two halves."""

    def test_section_action_replaces_section_only(self, state):
        new = reduce_composite(state, Action.section(SectionEvent.TITLE, "About them"), reduce_text)
        assert new.section.title == "About them"
        assert new.component is state.component
        assert changed_halves(state, new) == (True, False)

    def test_component_action_replaces_component_only(self, state):
        new = reduce_composite(state, Action.component(TextEvent.LABEL, "Name"), reduce_text)
        assert new.section is state.section
        assert changed_halves(state, new) == (False, True)

    def test_no_change_returns_same_state(self, state):
        assert reduce_composite(state, Action.component(None), reduce_text) is state


class TestUndo:
    """Test undo restores the state before the last commit."""

    def test_undo_after_commit(self, state):
        committed = reduce_composite(state, Action.component(TextEvent.LABEL, "Name"), reduce_text)
        undone = reduce_composite(committed, Action.undo(), reduce_text)

        assert undone.component.content() == fill_missing(state.component.content())
        assert undone.component.undo.content() == state.component.undo.content()
        assert undone.section.content() == state.section.undo.content()

    def test_undo_restores_both_halves(self, state):
        state = reduce_composite(state, Action.section(SectionEvent.TITLE, "About them"), reduce_text)
        state = reduce_composite(state, Action.component(TextEvent.LABEL, "Name"), reduce_text)
        undone = reduce_composite(state, Action.undo(), reduce_text)

        assert undone.section.title == "About you"
        assert undone.component.label == "Full name"
        assert changed_halves(state, undone) == (True, True)

    def test_restore_without_snapshot(self):
        component = initial_text_state(FormComponent(id="x", type="text"))
        bare = component.model_copy(update={"undo": None})
        assert restore(bare) is bare

    def test_snapshot_chain_is_bounded(self, state):
        for label in ["a", "b", "c", "d"]:
            state = reduce_composite(state, Action.component(TextEvent.LABEL, label), reduce_text)
        assert state.component.undo.label == "c"
        assert state.component.undo.undo.label == "b"
        assert state.component.undo.undo.undo is None

    def test_undo_clears_added_value(self, state):
        state = reduce_composite(state, Action.section(SectionEvent.DESCRIPTION, "added"), reduce_text)
        undone = reduce_composite(state, Action.undo(), reduce_text)

        assert section_payload(undone.section, ".sections[0]")["section"]["description"] == ""

    def test_undo_clears_value_added_after_earlier_edits(self, state):
        state = reduce_composite(state, Action.section(SectionEvent.TITLE, "About them"), reduce_text)
        state = reduce_composite(state, Action.component(TextEvent.LABEL, "Name"), reduce_text)
        state = reduce_composite(state, Action.section(SectionEvent.DESCRIPTION, "added"), reduce_text)
        undone = reduce_composite(state, Action.undo(), reduce_text)

        payload = section_payload(undone.section, ".sections[0]")["section"]
        assert payload["title"] == "About them"
        assert payload["description"] == ""
