from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from promptdeck.catalogue.models import Catalogue, Task


@dataclass(frozen=True)
class CategoryVisibility:
    visible: bool
    matched_directly: bool
    visible_tasks: Tuple[str, ...]


VisibilityMap = Dict[str, CategoryVisibility]


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def task_matches(task: Task, query: str) -> bool:
    needle = normalize_query(query)
    if not needle:
        return True
    return needle in task.search_text()


def compute_visibility(catalogue: Catalogue, query: str | None) -> VisibilityMap:
    """Decide which categories and tasks are shown for ``query``.

    A category whose name contains the query keeps all of its tasks; any other
    category keeps only the tasks whose own text contains the query. The
    returned mapping follows catalogue order.
    """
    needle = normalize_query(query)
    visibility: VisibilityMap = {}
    for category in catalogue:
        if not needle:
            visibility[category.name] = CategoryVisibility(
                visible=True,
                matched_directly=False,
                visible_tasks=category.task_keys,
            )
            continue
        name_match = needle in category.name.lower()
        if name_match:
            visible_tasks = category.task_keys
        else:
            visible_tasks = tuple(key for key, task in category.tasks.items() if task_matches(task, needle))
        visibility[category.name] = CategoryVisibility(
            visible=name_match or bool(visible_tasks),
            matched_directly=name_match,
            visible_tasks=visible_tasks,
        )
    return visibility


def visible_counts(visibility: VisibilityMap) -> Tuple[int, int]:
    """Count the categories and tasks that end up on screen.

    A visible category with no visible tasks is not rendered and is not counted.
    """
    categories = 0
    tasks = 0
    for entry in visibility.values():
        if entry.visible and entry.visible_tasks:
            categories += 1
            tasks += len(entry.visible_tasks)
    return categories, tasks
