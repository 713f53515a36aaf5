from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, List

from promptdeck.catalogue.models import Catalogue, Task

PROMPT_FOOTER = "*Generated from Python Prompts Collection*"
NO_STEPS_PLACEHOLDER = "*No implementation steps available.*"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    media_type: str
    content: str


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def task_filename(task_key: str) -> str:
    return sanitize_filename(f"{task_key}.json")


def catalogue_filename(today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"python-prompts-{stamp}.json"


def export_task_json(task: Task) -> str:
    return _dump({task.key: task.to_dict()})


def export_selection_json(category: str, task: Task) -> str:
    """Single task wrapped in its category, loadable as a catalogue."""
    return _dump({category: {task.key: task.to_dict()}})


def export_catalogue_json(catalogue: Catalogue) -> str:
    return _dump(catalogue.to_dict())


def build_prompt_text(task: Task) -> str:
    lines: List[str] = [
        f"# {task.key}",
        "",
        f"**Description:** {task.description}" if task.description else "",
        "",
    ]
    if task.has_steps:
        lines.append("## Implementation Steps:")
        lines.append("")
        for index, step in enumerate(task.step_list, start=1):
            lines.append(f"{index}. {step}")
    else:
        lines.append(NO_STEPS_PLACEHOLDER)
    lines.append("")
    lines.append("---")
    lines.append(PROMPT_FOOTER)
    # Blank separators are dropped from the final artifact.
    return "\n".join(line for line in lines if line != "")
