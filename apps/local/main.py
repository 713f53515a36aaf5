from __future__ import annotations

from typing import Any, Callable, NoReturn

from fastapi import Body, FastAPI, HTTPException, Response
from pydantic import BaseModel

from promptdeck.catalogue.errors import CatalogueError
from promptdeck.catalogue.export import ExportArtifact
from promptdeck.catalogue.service import CatalogueSession
from promptdeck.catalogue.sinks import DirectoryExportSink
from promptdeck.catalogue.view import CatalogueView, TaskDetail
from promptdeck.config import ensure_directories
from promptdeck.logging.audit import audit_event
from promptdeck.logging.logger import get_logger
from promptdeck.preferences.theme import ThemeStore


class QueryRequest(BaseModel):
    query: str = ""


class ToggleRequest(BaseModel):
    name: str


class SelectRequest(BaseModel):
    category: str
    task_key: str


class ThemeRequest(BaseModel):
    theme: str


class ThemeResponse(BaseModel):
    theme: str


class NoticeResponse(BaseModel):
    level: str
    message: str


class NotificationsResponse(BaseModel):
    notifications: list[NoticeResponse]


class SavedExportResponse(BaseModel):
    filename: str
    path: str


def _raise_http(exc: CatalogueError) -> NoReturn:
    raise HTTPException(
        status_code=exc.status_code,
        detail={"error": exc.kind, "message": exc.message},
    ) from exc


def _download(artifact: ExportArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


def create_app(
    session: CatalogueSession | None = None,
    theme_store: ThemeStore | None = None,
    export_sink: DirectoryExportSink | None = None,
) -> FastAPI:
    paths = ensure_directories()
    logger = get_logger()
    app = FastAPI(title="PromptDeck Local")
    session = session or CatalogueSession()
    theme_store = theme_store or ThemeStore(paths.theme_path)
    export_sink = export_sink or DirectoryExportSink(paths.exports_dir)

    try:
        session.bootstrap()
    except CatalogueError as exc:
        logger.error("Error loading prompts: %s", exc.message)
        audit_event("catalogue.bootstrap_failed", error=exc.kind)
    app.state.session = session

    def _guard(action: Callable[[], Any]) -> Any:
        try:
            return action()
        except CatalogueError as exc:
            _raise_http(exc)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/catalogue/view", response_model=CatalogueView)
    def catalogue_view() -> CatalogueView:
        return _guard(session.view)

    @app.post("/catalogue/query", response_model=CatalogueView)
    def catalogue_query(payload: QueryRequest) -> CatalogueView:
        return _guard(lambda: session.set_query(payload.query))

    @app.delete("/catalogue/query", response_model=CatalogueView)
    def catalogue_clear_query() -> CatalogueView:
        return _guard(session.clear_query)

    @app.post("/catalogue/categories/toggle", response_model=CatalogueView)
    def catalogue_toggle(payload: ToggleRequest) -> CatalogueView:
        return _guard(lambda: session.toggle_category(payload.name))

    @app.post("/catalogue/select", response_model=CatalogueView)
    def catalogue_select(payload: SelectRequest) -> CatalogueView:
        return _guard(lambda: session.select_task(payload.category, payload.task_key))

    @app.get("/catalogue/task", response_model=TaskDetail | None)
    def catalogue_task() -> TaskDetail | None:
        return _guard(session.task_detail)

    @app.post("/catalogue/replace", response_model=CatalogueView)
    def catalogue_replace(payload: Any = Body(...)) -> CatalogueView:
        return _guard(lambda: session.replace_catalogue(payload))

    @app.post("/catalogue/refresh", response_model=CatalogueView)
    def catalogue_refresh() -> CatalogueView:
        return _guard(session.refresh)

    @app.get("/export/task")
    def export_task() -> Response:
        return _download(_guard(session.export_task))

    @app.get("/export/selection")
    def export_selection() -> Response:
        return _download(_guard(session.export_selection))

    @app.get("/export/catalogue")
    def export_catalogue() -> Response:
        return _download(_guard(session.export_catalogue))

    @app.get("/export/prompt")
    def export_prompt() -> Response:
        return Response(content=_guard(session.prompt_text), media_type="text/plain")

    @app.post("/export/{kind}/save", response_model=SavedExportResponse)
    def export_save(kind: str) -> SavedExportResponse:
        producers = {
            "task": session.export_task,
            "selection": session.export_selection,
            "catalogue": session.export_catalogue,
        }
        producer = producers.get(kind)
        if producer is None:
            raise HTTPException(
                status_code=404,
                detail={"error": "unknown_export", "message": f"Unknown export kind '{kind}'."},
            )
        artifact = _guard(producer)
        path = export_sink.deliver(artifact)
        return SavedExportResponse(filename=artifact.filename, path=path)

    @app.get("/notifications", response_model=NotificationsResponse)
    def notifications() -> NotificationsResponse:
        notices = session.drain_notices()
        return NotificationsResponse(
            notifications=[NoticeResponse(level=notice.level, message=notice.message) for notice in notices]
        )

    @app.get("/theme", response_model=ThemeResponse)
    def theme_get() -> ThemeResponse:
        return ThemeResponse(theme=theme_store.get())

    @app.post("/theme/toggle", response_model=ThemeResponse)
    def theme_toggle() -> ThemeResponse:
        return ThemeResponse(theme=theme_store.cycle())

    @app.put("/theme", response_model=ThemeResponse)
    def theme_set(payload: ThemeRequest) -> ThemeResponse:
        try:
            theme = theme_store.set(payload.theme)
        except ValueError as exc:
            raise HTTPException(
                status_code=400,
                detail={"error": "invalid_theme", "message": str(exc)},
            ) from exc
        return ThemeResponse(theme=theme)

    return app


app = create_app()
