"""Tests for mounted editors and response application."""

import pytest

from liveedit.editor import FieldEditor, NoteEditor, PageEditor, StateObserver
from liveedit.enums import NoteKind
from liveedit.fields import AddAnotherQuestionEvent, ChoiceEvent, RepeaterEvent, SectionEvent, SummaryEvent, TextEvent
from liveedit.fields.base import Action
from liveedit.fields.note import NoteEvent
from liveedit.models import AddToListRepeaterPage, Coordinates, NormalPage, ServerPageData
from liveedit.response import ErrorSlot, RenderResponse, ResponseApplier

HOST = "https://forms.example.com"


class RecordingQueue:
    def __init__(self):
        self.entries = []

    def enqueue(self, entry):
        self.entries.append(entry)


@pytest.fixture
def page():
    return ServerPageData.model_validate(
        {
            "section": {
                "title": "About you",
                "fields": [
                    {"id": "fullName", "type": "text", "label": "Full name"},
                    {"id": "colour", "type": "choice", "choices": ["Red", "Blue"]},
                    {"id": "group", "type": "group"},
                ],
            },
            "sectionPath": ".sections[0]",
        }
    )


@pytest.fixture
def queue():
    return RecordingQueue()


def mount(page, queue, component_id="fullName"):
    return FieldEditor.from_page(page, component_id, "ft1", NormalPage(0), queue, HOST, access_code="abc")


class TestStateObserver:
    """Test first notification suppression."""

    def test_first_notification_swallowed(self):
        seen = []
        observer = StateObserver(lambda old, new: seen.append(new))
        observer.notify(None, 1)
        observer.notify(1, 2)
        assert seen == [2]


class TestFieldEditor:
    """Test dispatching edits through a mounted editor."""

    def test_mount_enqueues_nothing(self, page, queue):
        mount(page, queue)
        assert queue.entries == []

    def test_component_edit_enqueues_component_request(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.component(TextEvent.LABEL, "Your name"))

        assert len(queue.entries) == 1
        entry = queue.entries[0]
        assert entry.persist_url.endswith("/update-form-component/ft1/fullName")
        assert entry.render_url.endswith("/generate-section-and-component-html/ft1/n0/fullName?a=abc")
        assert entry.payload["label"] == "Your name"

    def test_section_edit_enqueues_section_request(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.section(SectionEvent.TITLE, "About them"))

        assert len(queue.entries) == 1
        assert queue.entries[0].persist_url.endswith("/update-header/ft1")
        assert queue.entries[0].payload["section"]["title"] == "About them"

    def test_no_change_enqueues_nothing(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.component(None))
        assert queue.entries == []

    def test_undo_of_both_halves_enqueues_two_requests(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.section(SectionEvent.TITLE, "About them"))
        editor.dispatch(Action.component(TextEvent.LABEL, "Your name"))
        queue.entries.clear()

        state = editor.undo()
        assert state.section.title == "About you"
        assert state.component.label == "Full name"
        assert len(queue.entries) == 2

    def test_queued_payload_is_frozen(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.component(TextEvent.LABEL, "First"))
        editor.dispatch(Action.component(TextEvent.LABEL, "Second"))
        assert [e.payload["label"] for e in queue.entries] == ["First", "Second"]

    def test_choice_editor(self, page, queue):
        editor = mount(page, queue, "colour")
        editor.dispatch(Action.component(ChoiceEvent.CHOICE, "Green", index=0))
        assert queue.entries[0].payload["choices"][0] == {"en": "Green"}

    def test_unknown_component(self, page, queue):
        with pytest.raises(KeyError):
            mount(page, queue, "missing")

    def test_unsupported_component_type(self, page, queue):
        from liveedit.errors import UnsupportedFieldException

        with pytest.raises(UnsupportedFieldException):
            mount(page, queue, "group")

    def test_render_response_applied(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.component(TextEvent.LABEL, "Your name"))

        queue.entries[0].on_complete({"html": "<div>Your name</div>"})
        assert editor.last_render.html == "<div>Your name</div>"
        assert editor.error_slot.visible is False

    def test_error_response_shown(self, page, queue):
        editor = mount(page, queue)
        editor.dispatch(Action.component(TextEvent.LABEL, "Your name"))

        queue.entries[0].on_complete({"error": "Invalid label"})
        assert editor.error_slot.visible is True
        assert editor.error_slot.message == "Invalid label"

    def test_error_report_url(self, page, queue):
        editor = mount(page, queue)
        assert "baseComponentId=fullName" in editor.error_report_url


class TestNoteEditor:
    """Test note editing."""

    def test_add_note_saves_without_render(self, queue):
        editor = NoteEditor(NoteKind.SECTION, [], [], "ft1", queue, HOST, section_path=".sections[0]")
        assert queue.entries == []

        editor.dispatch(Action.component(NoteEvent.ADD))
        assert len(queue.entries) == 1
        assert queue.entries[0].persist_only
        assert queue.entries[0].payload["sectionPath"] == ".sections[0]"

    def test_failed_save_shown(self, queue):
        editor = NoteEditor(NoteKind.FORM_TEMPLATE, [], [], "ft1", queue, HOST)
        editor.dispatch(Action.component(NoteEvent.ADD))
        queue.entries[0].on_complete({"ok": False, "error": "denied"})
        assert editor.error_slot.message == "denied"


class TestPageEditor:
    """Test the repeater and summary section editors."""

    @pytest.fixture
    def repeater_page(self):
        return ServerPageData.model_validate(
            {
                "section": {
                    "title": "You have added ${count} pets",
                    "summaryName": "pet",
                    "addAnotherQuestion": {"id": "addPet", "label": "Add another pet?"},
                },
                "sectionPath": ".sections[2]",
                "atlRepeater": True,
            }
        )

    def test_repeater_title_edit(self, repeater_page, queue):
        editor = PageEditor.for_repeater(repeater_page, "ft1", AddToListRepeaterPage(2, 0), queue, HOST, "abc")
        assert queue.entries == []

        editor.dispatch(Action.component(RepeaterEvent.TITLE, "Your pets"))
        entry = queue.entries[0]
        assert entry.persist_url.endswith("/update-atl-repeater/ft1?sectionPath=.sections%5B2%5D")
        assert entry.render_url.endswith("/generate-atl-repeater/ft1/ar2.0?a=abc")
        assert entry.payload["title"] == "Your pets"

        entry.on_complete({"pageHeading": "<h1>Your pets</h1>", "descriptions": []})
        assert editor.last_render.page_heading == "<h1>Your pets</h1>"
        assert editor.error_slot.visible is False

    def test_repeater_undo_removes_added_cya_page(self, repeater_page, queue):
        editor = PageEditor.for_repeater(repeater_page, "ft1", AddToListRepeaterPage(2, 0), queue, HOST)
        editor.dispatch(Action.component(RepeaterEvent.ADD_CYA_PAGE))
        editor.undo()

        assert queue.entries[0].payload["cyaPage"]["title"] == "Check your answers"
        assert queue.entries[1].payload["cyaPage"] == ""

    def test_add_another_question(self, repeater_page, queue):
        editor = PageEditor.for_add_another_question(
            repeater_page, "ft1", AddToListRepeaterPage(2, 0), queue, HOST
        )
        editor.dispatch(Action.component(AddAnotherQuestionEvent.LABEL, "Add another?"))

        entry = queue.entries[0]
        assert "/update-atl-repeater/add-another-question/ft1?" in entry.persist_url
        assert entry.render_url.endswith("/generate-atl-repeater/add-another-question/ft1/ar2.0")
        assert entry.payload == {"label": "Add another?"}

    def test_summary_title_edit(self, queue):
        editor = PageEditor.for_summary(
            {"title": "Check your answers", "note": "Shorten"}, "ft1", queue, HOST, coordinates=Coordinates(1, 2)
        )
        editor.dispatch(Action.component(SummaryEvent.TITLE, "Check before sending"))

        entry = queue.entries[0]
        assert entry.persist_url.endswith("/update-summary-section/ft1?c=1,2")
        assert entry.render_url.endswith("/generate-summary-section/ft1?c=1,2")

        entry.on_complete({"error": "Title too long"})
        assert editor.error_slot.message == "Title too long"


class TestResponseApplier:
    """Test routing responses to the page or the error slot."""

    def test_success(self):
        applied = []
        slot = ErrorSlot()
        slot.show("old error")
        ResponseApplier(applied.append, slot)({"html": "<p/>", "sectionHtml": "<h1/>", "formLevelHeading": True})

        assert slot.visible is False
        assert applied == [RenderResponse(html="<p/>", section_html="<h1/>", form_level_heading=True)]

    def test_success_field(self):
        applied = []
        applier = ResponseApplier(applied.append, success_field="title")
        applier({"html": "<p/>"})
        applier({"title": "<h1>Check</h1>"})

        assert [response.title for response in applied] == ["<h1>Check</h1>"]
        assert applier.slot.visible is False

    def test_unexpected_shape(self):
        slot = ErrorSlot()
        ResponseApplier(lambda response: None, slot)({"status": "weird"})
        assert slot.message == '{"status": "weird"}'


def test_notes_of_fetched_section(queue):
    page = ServerPageData.model_validate(
        {
            "section": {"title": "Pets", "note": "Check wording", "doneNote": ["Old note"]},
            "sectionPath": ".sections[1]",
            "atlRepeater": True,
        }
    )
    editor = NoteEditor.for_section(page, "ft1", queue, HOST)
    assert editor.kind is NoteKind.ATL_REPEATER
    assert editor.state.notes[0].note_text == "Check wording"

    editor.dispatch(Action.component(NoteEvent.COLOR, "#ACD9F8", index=0))
    assert queue.entries[0].persist_url.endswith("/update-atl-repeater/ft1?sectionPath=.sections%5B1%5D")
    assert queue.entries[0].payload["doneNote"] == ["Old note"]
