"""Logging setup.

The full-screen UI owns the terminal, so log records go to a rotating
file. The REPL additionally mirrors records to stderr.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

_HANDLER_PREFIX = "_termchat"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_string(level: str) -> int:
    """Convert a level name to a logging level. Returns WARNING if unknown."""
    return _LEVELS.get(level.lower(), logging.WARNING)


def setup_logging(
    level: str = "warning",
    log_file: str | Path | None = None,
    stderr: bool = False,
) -> None:
    """Configure the ``termchat`` logger.

    Safe to call more than once: handlers installed by an earlier call are
    replaced.

    Args:
        level: Level name (debug, info, warning, error)
        log_file: Rotating log file (None to skip file logging)
        stderr: Also write records to stderr
    """
    logger = logging.getLogger("termchat")
    logger.setLevel(level_from_string(level))

    for handler in list(logger.handlers):
        if handler.name and handler.name.startswith(_HANDLER_PREFIX):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.name = f"{_HANDLER_PREFIX}_file"
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if stderr:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.name = f"{_HANDLER_PREFIX}_stream"
        stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(stream_handler)

    for name in ("httpx", "httpcore", "google_genai", "markdown_it", "aiosqlite", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)
