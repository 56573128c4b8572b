"""Editors mounted over one component, a page element, or the notes of a page."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from . import routes
from .builder import (
    EditorContext,
    build_component_request,
    build_note_request,
    build_page_request,
    build_section_request,
)
from .composite import CompositeState, changed_halves, reduce_composite, restore
from .enums import ActionTarget, NoteKind
from .fields import (
    ADD_ANOTHER_QUESTION,
    REPEATER,
    SUMMARY_SECTION,
    Action,
    FieldKind,
    FieldState,
    NoteState,
    PageKind,
    get_field_kind,
    initial_add_another_question_state,
    initial_note_state,
    initial_repeater_state,
    initial_section_state,
    initial_summary_state,
    reduce_note,
)
from .models import (
    Coordinates,
    FormComponent,
    NoteInfo,
    SectionNumber,
    ServerPageData,
    SummarySection,
    parse_notes,
)
from .queue import RequestQueue
from .response import ErrorSlot, RenderResponse, ResponseApplier
from .smart_string import primary_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateObserver(Generic[T]):
    """Runs ``on_change(old, new)`` for every settled state after the first.

    The first notification is the editor mounting with the state it was
    given, which is already what the service holds.
    """

    def __init__(self, on_change: Callable[[Optional[T], T], None]):
        self._on_change = on_change
        self._mounted = False

    def notify(self, old: Optional[T], new: T) -> None:
        if not self._mounted:
            self._mounted = True
            return
        self._on_change(old, new)


class FieldEditor:
    """Section and component editing for one form component.

    Every settled change enqueues one request per changed half: a section
    request rendered with ``on_section_render`` and a component request
    rendered with ``on_component_render``. Server errors go to ``error_slot``.
    """

    def __init__(
        self,
        kind: FieldKind,
        component: FormComponent,
        page: ServerPageData,
        context: EditorContext,
        queue: RequestQueue,
        host: str,
        on_component_render: Optional[Callable[[RenderResponse], None]] = None,
        on_section_render: Optional[Callable[[RenderResponse], None]] = None,
    ):
        self.kind = kind
        self.component_id = component.id
        self.context = context
        self.queue = queue
        self.host = host
        self.error_slot = ErrorSlot()
        self.last_render: Optional[RenderResponse] = None

        self._on_component = ResponseApplier(on_component_render or self._keep_render, self.error_slot)
        self._on_section = ResponseApplier(on_section_render or self._keep_render, self.error_slot)

        self.state = CompositeState(
            section=initial_section_state(page.section),
            component=kind.initial_state(component),
        )
        self._observer: StateObserver[CompositeState] = StateObserver(self._enqueue_changes)
        self._observer.notify(None, self.state)

    @classmethod
    def from_page(
        cls,
        page: ServerPageData,
        component_id: str,
        form_template_id: str,
        section_number: SectionNumber,
        queue: RequestQueue,
        host: str,
        access_code: Optional[str] = None,
        **callbacks: Any,
    ) -> "FieldEditor":
        """Mount an editor over a component of a fetched section."""
        component = next((f for f in page.section.fields if f.id == component_id), None)
        if component is None:
            raise KeyError(f"Component {component_id} not found in section {page.section_path}")

        logger.debug(f"Mounted {component.type} editor for {component_id}: {primary_text(component.label)}")
        context = EditorContext.from_page(form_template_id, section_number, page, access_code)
        return cls(get_field_kind(component.type), component, page, context, queue, host, **callbacks)

    @property
    def error_report_url(self) -> str:
        return routes.error_report_url(self.host, self.context.form_template_id, self.component_id)

    def dispatch(self, action: Action) -> CompositeState:
        new = reduce_composite(self.state, action, self.kind.reduce)
        if new is self.state:
            return self.state

        old, self.state = self.state, new
        self._observer.notify(old, new)
        return new

    def undo(self) -> CompositeState:
        return self.dispatch(Action.undo())

    def _keep_render(self, response: RenderResponse) -> None:
        self.last_render = response

    def _enqueue_changes(self, old: Optional[CompositeState], new: CompositeState) -> None:
        section_changed, component_changed = changed_halves(old, new)

        if section_changed:
            request = build_section_request(new.section, self.component_id, self.context)
            self.queue.enqueue(routes.queue_entry(self.host, request, self._on_section))

        if component_changed:
            request = build_component_request(self.kind, new.component, self.component_id, self.context)
            self.queue.enqueue(routes.queue_entry(self.host, request, self._on_component))


class NoteEditor:
    """Sticky notes of one section, summary, template or add-to-list page.

    Note updates are persisted without a re-render.
    """

    def __init__(
        self,
        kind: NoteKind,
        notes: list[NoteInfo],
        done_notes: list[str],
        form_template_id: str,
        queue: RequestQueue,
        host: str,
        section_path: str = "",
        coordinates: Optional[Coordinates] = None,
    ):
        self.kind = kind
        self.form_template_id = form_template_id
        self.queue = queue
        self.host = host
        self.section_path = section_path
        self.coordinates = coordinates
        self.error_slot = ErrorSlot()

        self.state = initial_note_state(notes, done_notes)
        self._observer: StateObserver[NoteState] = StateObserver(self._enqueue_changes)
        self._observer.notify(None, self.state)

    @classmethod
    def for_section(
        cls, page: ServerPageData, form_template_id: str, queue: RequestQueue, host: str
    ) -> "NoteEditor":
        """Notes pinned on a fetched section."""
        section = page.section
        if page.atl_repeater:
            kind = NoteKind.ATL_REPEATER
        elif page.atl_default_page:
            kind = NoteKind.ATL_DEFAULT_PAGE
        elif page.atl_cya_page:
            kind = NoteKind.ATL_CYA_PAGE
        else:
            kind = NoteKind.SECTION
        return cls(
            kind,
            parse_notes(section.note),
            section.done_note,
            form_template_id,
            queue,
            host,
            section_path=page.section_path,
        )

    def dispatch(self, action: Action) -> NoteState:
        new = reduce_note(self.state, action)
        if new is self.state:
            return self.state

        old, self.state = self.state, new
        self._observer.notify(old, new)
        return new

    def _saved(self, response: dict[str, Any]) -> None:
        if response.get("ok"):
            self.error_slot.hide()
        else:
            logger.error(f"Failed to save notes: {response.get('error')}")
            self.error_slot.show(response.get("error") or "Failed to save notes")

    def _enqueue_changes(self, old: Optional[NoteState], new: NoteState) -> None:
        request = build_note_request(new, self.kind, self.form_template_id, self.section_path, self.coordinates)
        if request is None:
            return
        self.queue.enqueue(routes.queue_entry(self.host, request, self._saved))


class PageEditor:
    """Editing of an add-to-list repeater, its add another question, or a summary section.

    Each settled change enqueues one request rendered back onto the page.
    """

    def __init__(
        self,
        kind: PageKind,
        state: FieldState,
        form_template_id: str,
        queue: RequestQueue,
        host: str,
        section_number: Optional[SectionNumber] = None,
        section_path: str = "",
        access_code: Optional[str] = None,
        coordinates: Optional[Coordinates] = None,
        on_render: Optional[Callable[[RenderResponse], None]] = None,
    ):
        self.kind = kind
        self.form_template_id = form_template_id
        self.queue = queue
        self.host = host
        self.section_number = section_number
        self.section_path = section_path
        self.access_code = access_code
        self.coordinates = coordinates
        self.error_slot = ErrorSlot()
        self.last_render: Optional[RenderResponse] = None

        self._on_render = ResponseApplier(on_render or self._keep_render, self.error_slot, kind.success_field)

        self.state = state
        self._observer: StateObserver[FieldState] = StateObserver(self._enqueue_changes)
        self._observer.notify(None, self.state)

    @classmethod
    def for_repeater(
        cls,
        page: ServerPageData,
        form_template_id: str,
        section_number: SectionNumber,
        queue: RequestQueue,
        host: str,
        access_code: Optional[str] = None,
        **callbacks: Any,
    ) -> "PageEditor":
        repeater = page.repeater()
        logger.debug(f"Mounted repeater editor for {page.section_path}: {primary_text(repeater.title)}")
        return cls(
            REPEATER,
            initial_repeater_state(repeater),
            form_template_id,
            queue,
            host,
            section_number=section_number,
            section_path=page.section_path,
            access_code=access_code,
            **callbacks,
        )

    @classmethod
    def for_add_another_question(
        cls,
        page: ServerPageData,
        form_template_id: str,
        section_number: SectionNumber,
        queue: RequestQueue,
        host: str,
        access_code: Optional[str] = None,
        **callbacks: Any,
    ) -> "PageEditor":
        question = page.repeater().add_another_question
        if question is None:
            raise KeyError(f"Repeater {page.section_path} has no add another question")
        return cls(
            ADD_ANOTHER_QUESTION,
            initial_add_another_question_state(question),
            form_template_id,
            queue,
            host,
            section_number=section_number,
            section_path=page.section_path,
            access_code=access_code,
            **callbacks,
        )

    @classmethod
    def for_summary(
        cls,
        data: dict[str, Any],
        form_template_id: str,
        queue: RequestQueue,
        host: str,
        coordinates: Optional[Coordinates] = None,
        access_code: Optional[str] = None,
        **callbacks: Any,
    ) -> "PageEditor":
        """Editor over a summary section as the original-summary-section endpoint returns it."""
        summary = SummarySection.model_validate(data)
        return cls(
            SUMMARY_SECTION,
            initial_summary_state(summary),
            form_template_id,
            queue,
            host,
            access_code=access_code,
            coordinates=coordinates,
            **callbacks,
        )

    def dispatch(self, action: Action) -> FieldState:
        if action.target is ActionTarget.UNDO:
            new = restore(self.state)
        else:
            new = self.kind.reduce(self.state, action)
        if new is self.state:
            return self.state

        old, self.state = self.state, new
        self._observer.notify(old, new)
        return new

    def undo(self) -> FieldState:
        return self.dispatch(Action.undo())

    def _keep_render(self, response: RenderResponse) -> None:
        self.last_render = response

    def _enqueue_changes(self, old: Optional[FieldState], new: FieldState) -> None:
        request = build_page_request(
            self.kind,
            new,
            self.form_template_id,
            section_number=self.section_number,
            section_path=self.section_path,
            access_code=self.access_code,
            coordinates=self.coordinates,
        )
        self.queue.enqueue(routes.queue_entry(self.host, request, self._on_render))
