from __future__ import annotations

from datetime import date
from typing import Any, Callable, List, Optional

from promptdeck.catalogue import state as transitions
from promptdeck.catalogue.errors import CatalogueError, CatalogueNotLoadedError, SelectionError
from promptdeck.catalogue.export import (
    ExportArtifact,
    build_prompt_text,
    catalogue_filename,
    export_catalogue_json,
    export_selection_json,
    export_task_json,
    task_filename,
)
from promptdeck.catalogue.loader import LoadOutcome, Notice, load, load_catalogue_source
from promptdeck.catalogue.models import Catalogue, Task
from promptdeck.catalogue.sinks import ViewSink
from promptdeck.catalogue.state import Selection, SessionState
from promptdeck.catalogue.view import CatalogueView, TaskDetail, build_task_detail, build_view
from promptdeck.config import CatalogueConfig, get_catalogue_config
from promptdeck.logging.audit import audit_event, safe_excerpt

Loader = Callable[..., LoadOutcome]


class CatalogueSession:
    """Owns the loaded catalogue and the session state for one user."""

    def __init__(
        self,
        config: CatalogueConfig | None = None,
        view_sink: ViewSink | None = None,
        loader: Loader = load_catalogue_source,
    ):
        self._config = config or get_catalogue_config()
        self._view_sink = view_sink
        self._loader = loader
        self._catalogue: Optional[Catalogue] = None
        self._state = SessionState()
        self._notices: List[Notice] = []
        self.source: Optional[str] = None

    @property
    def config(self) -> CatalogueConfig:
        return self._config

    @property
    def catalogue(self) -> Catalogue:
        if self._catalogue is None:
            raise CatalogueNotLoadedError()
        return self._catalogue

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._catalogue is not None

    def bootstrap(self) -> CatalogueView:
        outcome = self._loader(self._config.catalogue_path, allow_fallback=self._config.allow_fallback)
        self._install(outcome.catalogue, source=outcome.source)
        self._notify(outcome.notice.level, outcome.notice.message)
        return self._publish()

    def refresh(self) -> CatalogueView:
        if self._catalogue is None:
            return self.bootstrap()
        try:
            outcome = self._loader(self._config.catalogue_path, allow_fallback=False)
        except CatalogueError as exc:
            audit_event("catalogue.refresh_failed", error=exc.kind)
            self._notify("error", f"Failed to load prompts data: {exc.message}")
            return self._publish()
        self._install(outcome.catalogue, source=outcome.source)
        self._notify(outcome.notice.level, outcome.notice.message)
        return self._publish()

    def replace_catalogue(self, raw: Any) -> CatalogueView:
        catalogue = load(raw)
        self._install(catalogue, source="upload")
        self._notify("success", "Prompts loaded successfully")
        return self._publish()

    def set_query(self, query: str) -> CatalogueView:
        self._state = transitions.set_query(self._state, self.catalogue, query)
        audit_event("catalogue.query", query=safe_excerpt(self._state.query), expanded=len(self._state.expanded))
        return self._publish()

    def clear_query(self) -> CatalogueView:
        return self.set_query("")

    def toggle_category(self, name: str) -> CatalogueView:
        self._state = transitions.toggle_category(self._state, self.catalogue, name)
        audit_event("catalogue.toggle", category=name, expanded=self._state.is_expanded(name))
        return self._publish()

    def select_task(self, category: str, task_key: str) -> CatalogueView:
        try:
            self._state = transitions.select_task(self._state, self.catalogue, category, task_key)
        except SelectionError as exc:
            audit_event("catalogue.select", category=category, task=task_key, result=exc.kind)
            self._notify("error", exc.message)
            raise
        audit_event("catalogue.select", category=category, task=task_key, result="selected")
        return self._publish()

    def view(self) -> CatalogueView:
        return build_view(self.catalogue, self._state, summary_length=self._config.summary_length)

    def task_detail(self) -> TaskDetail | None:
        return build_task_detail(self.catalogue, self._state.selection)

    def export_task(self) -> ExportArtifact:
        _, task = self._selected_task()
        audit_event("export.task", task=task.key)
        return ExportArtifact(
            filename=task_filename(task.key),
            media_type="application/json",
            content=export_task_json(task),
        )

    def export_selection(self) -> ExportArtifact:
        selection, task = self._selected_task()
        audit_event("export.selection", category=selection.category, task=task.key)
        return ExportArtifact(
            filename=task_filename(task.key),
            media_type="application/json",
            content=export_selection_json(selection.category, task),
        )

    def export_catalogue(self, today: date | None = None) -> ExportArtifact:
        catalogue = self.catalogue
        audit_event("export.catalogue", categories=len(catalogue), tasks=catalogue.task_count)
        return ExportArtifact(
            filename=catalogue_filename(today),
            media_type="application/json",
            content=export_catalogue_json(catalogue),
        )

    def prompt_text(self) -> str:
        _, task = self._selected_task()
        audit_event("export.prompt", task=task.key)
        return build_prompt_text(task)

    def drain_notices(self) -> List[Notice]:
        notices, self._notices = self._notices, []
        return notices

    def _selected_task(self) -> tuple[Selection, Task]:
        catalogue = self.catalogue
        selection = self._state.selection
        if selection is None:
            raise SelectionError(SelectionError.NONE_SELECTED, "No task selected")
        task = catalogue.get_task(selection.category, selection.task_key)
        if task is None:
            raise SelectionError(
                SelectionError.NOT_FOUND,
                "Task not found",
                category=selection.category,
                task=selection.task_key,
            )
        return selection, task

    def _install(self, catalogue: Catalogue, *, source: str) -> None:
        # Sample data is a placeholder; the first real catalogue starts fresh.
        if self._catalogue is None or (self.source == "fallback" and source != "fallback"):
            self._state = transitions.initial_state(catalogue)
        else:
            self._state = transitions.reload(self._state, catalogue)
        self._catalogue = catalogue
        self.source = source
        audit_event(
            "catalogue.installed",
            source=source,
            categories=len(catalogue),
            tasks=catalogue.task_count,
            selection_kept=self._state.selection is not None,
        )

    def _notify(self, level: str, message: str) -> None:
        self._notices.append(Notice(level, message))

    def _publish(self) -> CatalogueView:
        view = self.view()
        if self._view_sink is not None:
            self._view_sink.render(view)
        return view
