"""Shared machinery for field state reducers.

Every editable state is a pydantic model carrying ``undo``: a deep snapshot of
the state before the most recent committed change. Reducers are written as
functions returning the changed attributes; the ``reducer`` decorator turns
them into ``(state, action) -> state`` transitions that stamp the snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ActionTarget
from ..smart_string import SmartString, SmartStringEdit, apply_edit, to_wire
from ..utils import fill_missing

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="FieldState")

Changes = Optional[dict[str, Any]]


class FieldState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    undo: Optional[Any] = Field(default=None, exclude=True, repr=False)

    def content(self) -> dict[str, Any]:
        """Editable attributes without the undo snapshot."""
        return self.model_dump(exclude={"undo"})


@dataclass(frozen=True)
class Action:
    """A dispatched edit intent.

    ``event`` belongs to the event enum of the addressed field kind. ``label``
    carries the section title for page heading toggles.
    """

    target: ActionTarget
    event: Optional[Enum] = None
    content: Any = None
    index: int = 0
    label: Optional[SmartString] = None

    @classmethod
    def component(cls, event: Enum, content: Any = None, index: int = 0, **kwargs) -> "Action":
        return cls(ActionTarget.COMPONENT, event, content, index, **kwargs)

    @classmethod
    def section(cls, event: Enum, content: Any = None, index: int = 0) -> "Action":
        return cls(ActionTarget.SECTION, event, content, index)

    @classmethod
    def undo(cls) -> "Action":
        return cls(ActionTarget.UNDO)


def _filled(state: S, undo: Any = None) -> S:
    """Deep copy of ``state`` with every missing value as "".

    Undoing to such a copy sends "" for attributes that had no value, which
    clears a value the user introduced after that point.
    """
    attributes = {name: getattr(state, name) for name in type(state).model_fields if name != "undo"}
    return state.model_copy(update={**fill_missing(attributes), "undo": None}).model_copy(
        deep=True, update={"undo": undo}
    )


def snapshot(state: S) -> S:
    """Copy of ``state`` for use as the next state's undo.

    The copy keeps one further step back (the state's own undo) and drops
    anything older, so the chain never grows past two levels.
    """
    previous = _filled(state.undo) if state.undo is not None else None
    return _filled(state, previous)


def with_baseline(state: S) -> S:
    """Attach the initial undo snapshot, with every missing value as ""."""
    return state.model_copy(update={"undo": _filled(state)})


def reducer(func: Callable[[S, Action], Changes]) -> Callable[[S, Action], S]:
    """Turn a changes-returning function into a reducer.

    A function returning None (or an empty dict) leaves the state untouched and
    the same object is returned, which downstream observers treat as no change.
    """

    @wraps(func)
    def wrapper(state: S, action: Action) -> S:
        previous = snapshot(state)
        changes = func(state, action)
        if not changes:
            logger.debug(f"{func.__name__}: no change for {action.event}")
            return state
        return state.model_copy(update={**changes, "undo": previous})

    return wrapper


def edit_text(current: Optional[SmartString], action: Action) -> SmartString:
    """Apply a SmartString edit carried by an action.

    The action content is either a ``SmartStringEdit`` or plain text, which
    edits the variant at ``action.index``.
    """
    edit = action.content
    if not isinstance(edit, SmartStringEdit):
        edit = SmartStringEdit(text=str(edit), index=action.index)
    return apply_edit(current, edit)


def replace_at(values: list[Any], index: int, value: Any) -> list[Any]:
    """Copy of ``values`` with one index replaced, padding with "" when needed."""
    if index < 0:
        raise IndexError(f"Negative index {index}")
    updated = list(values)
    if index >= len(updated):
        updated.extend([""] * (index + 1 - len(updated)))
    updated[index] = value
    return updated


def encode_mandatory(optional: bool) -> Any:
    """False marks the component optional, "" restores the schema default."""
    return False if optional else ""


def compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop attributes without a value; the service keeps them unchanged."""
    return {k: v for k, v in payload.items() if v is not None}


class LabelledState(FieldState):
    """Attributes every labelled component editor owns."""

    label: Optional[SmartString] = None
    page_heading: bool = False
    help_text: Optional[SmartString] = None
    short_name: Optional[SmartString] = None


def shared_changes(
    state: FieldState,
    action: Action,
    text_events: dict[Enum, str],
    value_events: Optional[dict[Enum, str]] = None,
) -> Changes:
    """Changes for events that edit one attribute directly.

    ``text_events`` map to SmartString attributes, ``value_events`` to
    attributes replaced by the action content.
    """
    if action.event in text_events:
        name = text_events[action.event]
        return {name: edit_text(getattr(state, name), action)}
    if value_events and action.event in value_events:
        return {value_events[action.event]: action.content}
    return None


def page_heading_changes(action: Action) -> dict[str, Any]:
    """Toggle whether the section title doubles as the component label.

    The dispatcher passes the label to show afterwards: the component's own
    label when switching on, the section title when switching off.
    """
    return {"page_heading": bool(action.content), "label": action.label}


def labelled_payload(state: LabelledState, component_id: str) -> dict[str, Any]:
    # An empty label is purged by the service, leaving the title as heading
    label = "" if state.page_heading else to_wire(state.label)
    return {
        "id": component_id,
        "label": label,
        "helpText": to_wire(state.help_text),
        "shortName": to_wire(state.short_name),
    }
