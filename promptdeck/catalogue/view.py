from __future__ import annotations

from pydantic import BaseModel, Field

from promptdeck.catalogue.filter import compute_visibility, visible_counts
from promptdeck.catalogue.models import Catalogue
from promptdeck.catalogue.state import Selection, SessionState

NO_CATEGORIES_MESSAGE = "No categories found"
NO_MATCHES_MESSAGE = "No tasks match your search"
NO_DESCRIPTION = "No description available"


class SelectionView(BaseModel):
    category: str
    task_key: str


class TaskItemView(BaseModel):
    key: str
    summary: str | None = None
    active: bool = False


class CategoryView(BaseModel):
    name: str
    expanded: bool
    matched_directly: bool = False
    task_count: int
    tasks: list[TaskItemView] = Field(default_factory=list)


class CatalogueView(BaseModel):
    query: str
    searching: bool
    counter: str
    categories: list[CategoryView] = Field(default_factory=list)
    empty_message: str | None = None
    selection: SelectionView | None = None


class TaskDetail(BaseModel):
    category: str
    title: str
    description: str
    steps: list[str] = Field(default_factory=list)
    step_count: int
    has_steps: bool


def summarize(text: str | None, max_length: int = 80) -> str | None:
    if not text:
        return None
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def build_counter(catalogue: Catalogue, state: SessionState) -> str:
    if not state.query:
        return f"{len(catalogue)} categories, {catalogue.task_count} tasks"
    categories, tasks = visible_counts(compute_visibility(catalogue, state.query))
    return f"Search: {categories} categories, {tasks} tasks"


def _selection_view(selection: Selection | None) -> SelectionView | None:
    if selection is None:
        return None
    return SelectionView(category=selection.category, task_key=selection.task_key)


def build_view(catalogue: Catalogue, state: SessionState, *, summary_length: int = 80) -> CatalogueView:
    visibility = compute_visibility(catalogue, state.query)
    categories: list[CategoryView] = []
    for category in catalogue:
        entry = visibility[category.name]
        if not entry.visible or not entry.visible_tasks:
            continue
        tasks = [
            TaskItemView(
                key=key,
                summary=summarize(category.tasks[key].description, summary_length),
                active=state.is_selected(category.name, key),
            )
            for key in entry.visible_tasks
        ]
        categories.append(
            CategoryView(
                name=category.name,
                expanded=state.is_expanded(category.name),
                matched_directly=entry.matched_directly,
                task_count=len(tasks),
                tasks=tasks,
            )
        )

    empty_message = None
    if not categories:
        empty_message = NO_MATCHES_MESSAGE if state.query else NO_CATEGORIES_MESSAGE

    return CatalogueView(
        query=state.query,
        searching=bool(state.query),
        counter=build_counter(catalogue, state),
        categories=categories,
        empty_message=empty_message,
        selection=_selection_view(state.selection),
    )


def build_task_detail(catalogue: Catalogue, selection: Selection | None) -> TaskDetail | None:
    if selection is None:
        return None
    task = catalogue.get_task(selection.category, selection.task_key)
    if task is None:
        return None
    steps = list(task.step_list)
    return TaskDetail(
        category=selection.category,
        title=task.key,
        description=task.description or NO_DESCRIPTION,
        steps=steps,
        step_count=len(steps),
        has_steps=bool(steps),
    )
