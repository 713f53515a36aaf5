from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from promptdeck.catalogue.errors import (
    CatalogueError,
    CatalogueUnavailableError,
    CatalogueValidationError,
)
from promptdeck.catalogue.fallback import sample_catalogue_data
from promptdeck.catalogue.models import Catalogue, Category, Task
from promptdeck.logging.audit import audit_event
from promptdeck.logging.logger import get_logger


@dataclass(frozen=True)
class Notice:
    level: str
    message: str


@dataclass(frozen=True)
class LoadOutcome:
    catalogue: Catalogue
    source: str
    notice: Notice
    error: Optional[CatalogueError] = None


def _build_task(category_name: str, task_key: str, raw_task: Any) -> Task:
    if not isinstance(task_key, str):
        raise CatalogueValidationError(
            CatalogueValidationError.INVALID_TASK,
            f"Task names must be strings: {task_key!r} in category {category_name}",
            category=category_name,
            task=str(task_key),
        )
    if not isinstance(raw_task, Mapping):
        raise CatalogueValidationError(
            CatalogueValidationError.INVALID_TASK,
            f"Invalid task: {task_key} in category {category_name}",
            category=category_name,
            task=task_key,
        )
    steps = raw_task.get("steps")
    if steps is not None:
        if not isinstance(steps, (list, tuple)):
            raise CatalogueValidationError(
                CatalogueValidationError.INVALID_TASK,
                f"Invalid steps for task: {task_key}",
                category=category_name,
                task=task_key,
            )
        if not all(isinstance(step, str) for step in steps):
            raise CatalogueValidationError(
                CatalogueValidationError.INVALID_TASK,
                f"Steps must be strings for task: {task_key}",
                category=category_name,
                task=task_key,
            )
        steps = tuple(steps)
    description = raw_task.get("description")
    if description is not None and not isinstance(description, str):
        raise CatalogueValidationError(
            CatalogueValidationError.INVALID_TASK,
            f"Invalid description for task: {task_key}",
            category=category_name,
            task=task_key,
        )
    return Task(
        key=task_key,
        description=description,
        steps=steps,
        source=MappingProxyType(copy.deepcopy(dict(raw_task))),
    )


def load(raw: Any) -> Catalogue:
    """Validate a decoded catalogue document and build a ``Catalogue``.

    The whole document is checked before anything is returned; the first
    violation raises ``CatalogueValidationError``.
    """
    if not isinstance(raw, Mapping):
        raise CatalogueValidationError(
            CatalogueValidationError.NOT_AN_OBJECT,
            "Invalid prompts data: not an object",
        )
    categories: Dict[str, Category] = {}
    for category_name, raw_category in raw.items():
        if not isinstance(category_name, str):
            raise CatalogueValidationError(
                CatalogueValidationError.INVALID_CATEGORY,
                f"Category names must be strings: {category_name!r}",
                category=str(category_name),
            )
        if not isinstance(raw_category, Mapping):
            raise CatalogueValidationError(
                CatalogueValidationError.INVALID_CATEGORY,
                f"Invalid category: {category_name}",
                category=category_name,
            )
        tasks = {
            task_key: _build_task(category_name, task_key, raw_task)
            for task_key, raw_task in raw_category.items()
        }
        categories[category_name] = Category(name=category_name, tasks=tasks)
    return Catalogue(categories=categories)


def load_json(text: str) -> Catalogue:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogueValidationError(
            CatalogueValidationError.NOT_AN_OBJECT,
            f"Invalid prompts data: {exc}",
        ) from exc
    return load(raw)


def load_catalogue_source(path: Path, allow_fallback: bool = True) -> LoadOutcome:
    """Load the catalogue file, substituting the sample catalogue on failure."""
    logger = get_logger()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        error: CatalogueError = CatalogueValidationError(
            CatalogueValidationError.NOT_AN_OBJECT,
            f"Invalid prompts data: {path} is not UTF-8 text ({exc.reason})",
        )
    except OSError as exc:
        error = CatalogueUnavailableError(
            f"Catalogue file unavailable: {path} ({exc.strerror or exc})"
        )
    else:
        try:
            catalogue = load_json(text)
        except CatalogueValidationError as exc:
            error = exc
        else:
            audit_event(
                "catalogue.loaded",
                source="file",
                path=str(path),
                categories=len(catalogue),
                tasks=catalogue.task_count,
            )
            return LoadOutcome(
                catalogue=catalogue,
                source="file",
                notice=Notice("success", "Prompts loaded successfully"),
            )

    if not allow_fallback:
        audit_event("catalogue.load_failed", path=str(path), error=error.kind)
        raise error

    logger.info("External catalogue not available, using embedded data: %s", error.message)
    catalogue = load(sample_catalogue_data())
    audit_event(
        "catalogue.loaded",
        source="fallback",
        path=str(path),
        error=error.kind,
        categories=len(catalogue),
        tasks=catalogue.task_count,
    )
    return LoadOutcome(
        catalogue=catalogue,
        source="fallback",
        notice=Notice("info", "Using sample data (prompts.json not found)"),
        error=error,
    )
