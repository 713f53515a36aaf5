from __future__ import annotations

import logging
import os
from typing import Optional


_LOGGER: Optional[logging.Logger] = None


def _resolve_level(name: str | None) -> int:
    level = logging.getLevelName((name or "INFO").strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("promptdeck")
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.setLevel(_resolve_level(os.getenv("PROMPTDECK_LOG_LEVEL")))
        _LOGGER = logger
    return _LOGGER
