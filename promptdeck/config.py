from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LocalPaths:
    base_dir: Path
    data_dir: Path
    logs_dir: Path
    exports_dir: Path
    catalogue_path: Path
    theme_path: Path


@dataclass(frozen=True)
class CatalogueConfig:
    catalogue_path: Path
    allow_fallback: bool
    summary_length: int


@dataclass(frozen=True)
class ShellConfig:
    host: str
    port: int
    log_level: str


def _default_base_dir() -> Path:
    override = os.getenv("PROMPTDECK_DATA_DIR")
    if override:
        return Path(override).expanduser()
    if sys.platform == "win32":
        root = Path(os.getenv("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return root / "PromptDeck"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "PromptDeck"
    root = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return root / "promptdeck"


def get_local_paths() -> LocalPaths:
    base_dir = _default_base_dir()
    data_dir = base_dir / "data"
    catalogue_path = Path(os.getenv("PROMPTDECK_CATALOGUE_PATH", data_dir / "prompts.json")).expanduser()
    return LocalPaths(
        base_dir=base_dir,
        data_dir=data_dir,
        logs_dir=base_dir / "logs",
        exports_dir=base_dir / "exports",
        catalogue_path=catalogue_path,
        theme_path=data_dir / "theme.json",
    )


def ensure_directories() -> LocalPaths:
    paths = get_local_paths()
    for path in (paths.base_dir, paths.data_dir, paths.logs_dir, paths.exports_dir):
        path.mkdir(parents=True, exist_ok=True)
    return paths


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_catalogue_config() -> CatalogueConfig:
    paths = get_local_paths()
    summary_length = _parse_int(os.getenv("PROMPTDECK_SUMMARY_LENGTH"), 80)
    if summary_length <= 0:
        summary_length = 80
    return CatalogueConfig(
        catalogue_path=paths.catalogue_path,
        allow_fallback=_parse_bool(os.getenv("PROMPTDECK_ALLOW_FALLBACK"), True),
        summary_length=summary_length,
    )


def get_shell_config() -> ShellConfig:
    log_level = os.getenv("PROMPTDECK_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    return ShellConfig(
        host=os.getenv("PROMPTDECK_LOCAL_HOST", "127.0.0.1"),
        port=_parse_int(os.getenv("PROMPTDECK_LOCAL_PORT"), 8000),
        log_level=log_level,
    )
