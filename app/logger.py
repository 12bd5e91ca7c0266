"""Loguru sinks for the collection manager."""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
_FALLBACK_LEVEL = "DEBUG"


def _resolve_level(level: str) -> tuple[str, bool]:
    """Return a level loguru knows, and whether *level* had to be replaced."""
    name = level.upper()
    try:
        logger.level(name)
    except ValueError:
        return _FALLBACK_LEVEL, True
    return name, False


def setup_logger(log_dir: Path | None = None, level: str | None = None) -> Path:
    """Install a console sink and a rotating ``app.log`` sink.

    *log_dir* and *level* default to ``Config().log_dir`` / ``Config().log_level``.
    An unknown level name falls back to DEBUG with a warning.

    Returns the log file path.
    """
    if log_dir is None or level is None:
        from app.config import Config
        cfg = Config()
        log_dir = log_dir or cfg.log_dir
        level = level or cfg.log_level

    resolved, replaced = _resolve_level(level)
    logger.remove()
    logger.add(sys.stderr, level=resolved, format=_CONSOLE_FORMAT, colorize=True)

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"
    logger.add(
        str(log_file),
        level=resolved,
        format=_FILE_FORMAT,
        rotation="10 MB",
        retention="7 days",
        encoding="utf-8",
        enqueue=True,
    )

    if replaced:
        logger.warning("Unknown log level {!r}, using {}", level, resolved)
    logger.info("Logging at {} to {}", resolved, log_file)
    return log_file
