from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Tuple

from promptdeck.logging.logger import get_logger

THEMES: Tuple[str, ...] = ("auto", "light", "dark")
DEFAULT_THEME = "auto"


class ThemeStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._current: str | None = None

    def get(self) -> str:
        if self._current is not None:
            return self._current
        if not self.path.exists():
            return DEFAULT_THEME
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return DEFAULT_THEME
        if not isinstance(data, dict):
            return DEFAULT_THEME
        theme = data.get("theme")
        if theme not in THEMES:
            return DEFAULT_THEME
        return theme

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"theme must be one of {', '.join(THEMES)}")
        payload = {"theme": theme, "updated_at": datetime.now(tz=timezone.utc).isoformat()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            get_logger().warning("Could not save theme preference to %s: %s", self.path, exc)
        self._current = theme
        return theme

    def cycle(self) -> str:
        current = self.get()
        next_theme = THEMES[(THEMES.index(current) + 1) % len(THEMES)]
        return self.set(next_theme)
