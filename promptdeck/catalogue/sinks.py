from __future__ import annotations

from pathlib import Path
from typing import Protocol

from promptdeck.catalogue.export import ExportArtifact, sanitize_filename
from promptdeck.catalogue.view import CatalogueView
from promptdeck.logging.audit import audit_event


class ViewSink(Protocol):
    def render(self, view: CatalogueView) -> None:
        ...


class ExportSink(Protocol):
    def deliver(self, artifact: ExportArtifact) -> str:
        ...


class DirectoryExportSink(ExportSink):
    """Writes export artifacts into a local directory."""

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def deliver(self, artifact: ExportArtifact) -> str:
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / sanitize_filename(artifact.filename)
        target.write_text(artifact.content, encoding="utf-8")
        audit_event("export.written", filename=target.name, size=len(artifact.content))
        return str(target)
