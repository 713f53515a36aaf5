"""Session state and the transitions that drive the catalogue browser.

Every transition is a pure function taking the current ``SessionState`` and
returning a new one. A transition that fails raises before building the new
value, so the caller's state is never half-updated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from promptdeck.catalogue.errors import SelectionError
from promptdeck.catalogue.filter import compute_visibility
from promptdeck.catalogue.models import Catalogue


@dataclass(frozen=True)
class Selection:
    category: str
    task_key: str


@dataclass(frozen=True)
class SessionState:
    query: str = ""
    expanded: FrozenSet[str] = field(default_factory=frozenset)
    selection: Optional[Selection] = None

    def is_expanded(self, category: str) -> bool:
        return category in self.expanded

    def is_selected(self, category: str, task_key: str) -> bool:
        return self.selection == Selection(category, task_key)


def initial_state(catalogue: Catalogue) -> SessionState:
    first = catalogue.first_category()
    if first is None:
        return SessionState()
    task = first.first_task()
    selection = Selection(first.name, task.key) if task is not None else None
    return SessionState(expanded=frozenset({first.name}), selection=selection)


def set_query(state: SessionState, catalogue: Catalogue, query: str) -> SessionState:
    trimmed = (query or "").strip()
    expanded = state.expanded
    if trimmed:
        visibility = compute_visibility(catalogue, trimmed)
        matching = {name for name, entry in visibility.items() if entry.visible}
        expanded = expanded | matching
    if trimmed == state.query and expanded == state.expanded:
        return state
    return replace(state, query=trimmed, expanded=frozenset(expanded))


def toggle_category(state: SessionState, catalogue: Catalogue, name: str) -> SessionState:
    # Stale UI events may name categories that no longer exist.
    if name not in catalogue:
        return state
    if name in state.expanded:
        return replace(state, expanded=state.expanded - {name})
    return replace(state, expanded=state.expanded | {name})


def select_task(state: SessionState, catalogue: Catalogue, category: str, task_key: str) -> SessionState:
    if not catalogue.has_task(category, task_key):
        raise SelectionError(
            SelectionError.NOT_FOUND,
            "Task not found",
            category=category,
            task=task_key,
        )
    return replace(state, selection=Selection(category, task_key))


def reload(state: SessionState, catalogue: Catalogue) -> SessionState:
    selection = state.selection
    if selection is not None and not catalogue.has_task(selection.category, selection.task_key):
        selection = None
    expanded = frozenset(name for name in state.expanded if name in catalogue)
    return replace(state, expanded=expanded, selection=selection)
