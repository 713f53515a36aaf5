from __future__ import annotations

import uvicorn
from dotenv import load_dotenv

from promptdeck.config import ensure_directories, get_shell_config
from promptdeck.logging.logger import get_logger


def main() -> None:
    # Local .env values must be visible before any config is read.
    load_dotenv()
    ensure_directories()
    config = get_shell_config()
    logger = get_logger()
    logger.info("Starting PromptDeck Local on %s:%s", config.host, config.port)
    uvicorn.run("apps.local.main:app", host=config.host, port=config.port, log_level=config.log_level.lower(), reload=False)


if __name__ == "__main__":
    main()
