"""Section and component state of one mounted editor."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .enums import ActionTarget
from .fields.base import Action, FieldState
from .fields.section import SectionState, reduce_section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositeState:
    section: SectionState
    component: FieldState


def restore(state: FieldState) -> FieldState:
    """The state before the last commit, still holding its own undo.

    Without a snapshot there is nothing to restore and the same object is
    returned.
    """
    if state.undo is None:
        return state
    return copy.deepcopy(state.undo)


def reduce_composite(
    state: CompositeState,
    action: Action,
    reduce_component: Callable[[FieldState, Action], FieldState],
) -> CompositeState:
    match action.target:
        case ActionTarget.SECTION:
            section = reduce_section(state.section, action)
            if section is state.section:
                return state
            return replace(state, section=section)
        case ActionTarget.COMPONENT:
            component = reduce_component(state.component, action)
            if component is state.component:
                return state
            return replace(state, component=component)
        case ActionTarget.UNDO:
            # Both halves change in one transition, so one undo can produce
            # a section request and a component request
            section = restore(state.section)
            component = restore(state.component)
            if section is state.section and component is state.component:
                return state
            return CompositeState(section=section, component=component)
        case _:
            logger.warning(f"Ignoring action with unknown target: {action.target}")
            return state


def changed_halves(old: Optional[CompositeState], new: CompositeState) -> tuple[bool, bool]:
    """Which halves were replaced between two states."""
    if old is None:
        return True, True
    return old.section is not new.section, old.component is not new.component
