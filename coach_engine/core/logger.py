"""Optional loguru sinks for hosts that want the engine's default log layout.

Importing the engine never touches logging: engine modules only emit through
the shared loguru logger. A host calls setup_logger() once from its
entry point; sinks that belong to the host are left alone.
"""

import sys
from pathlib import Path

from loguru import logger

from coach_engine.core.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"

# Handler ids added by this module; reconfiguring replaces only these
_engine_handler_ids: list[int] = []


def remove_engine_sinks() -> None:
    """Remove the sinks added by setup_logger, and nothing else."""
    while _engine_handler_ids:
        logger.remove(_engine_handler_ids.pop())


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    rotation: str | None = None,
    retention: str | None = None,
    console: bool = True,
) -> list[int]:
    """Add console and optional rotating file sinks; unset arguments come from settings.

    Calling it again swaps the previous engine sinks for new ones.

    Returns:
        Handler ids of the sinks that were added
    """
    remove_engine_sinks()
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    if console:
        _engine_handler_ids.append(logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _engine_handler_ids.append(
            logger.add(
                log_path,
                format=FILE_FORMAT,
                level=level,
                rotation=rotation or settings.log_rotation,
                retention=retention or settings.log_retention,
                compression="zip",
            )
        )

    logger.debug(f"[LOGGING] Engine sinks configured level={level} file={log_file}")
    return list(_engine_handler_ids)
