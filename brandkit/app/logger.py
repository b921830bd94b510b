"""Shared ``brandkit`` logger: DEBUG to a per-process file, progress to the console."""
import logging
import os
from pathlib import Path
from datetime import datetime

LOGS_DIR = Path(os.getenv("BRANDKIT_LOG_DIR", "logs"))
LOGS_DIR.mkdir(parents=True, exist_ok=True)

LOG_FILE = LOGS_DIR / f"brandkit_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(name: str = "brandkit", level: int = logging.INFO) -> logging.Logger:
    """Attach file and console handlers to ``name``, replacing any it already has."""
    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    log.handlers = []

    # enrichment payload sizes are logged at DEBUG
    file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    log.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    log.addHandler(console_handler)

    return log


def set_console_level(level: int) -> None:
    """Change the console verbosity of the shared logger (used by --quiet)."""
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


logger = setup_logger()
