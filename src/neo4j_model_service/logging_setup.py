import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: Optional[str] = None, colorize: bool = True) -> int:
    """
    Replace loguru's sinks with a single stderr sink.

    The library never calls this itself; applications do, once, at startup.
    Defaults to the level from ``app.log_level`` in the runtime settings.

    Returns:
        The id of the added sink.
    """
    if level is None:
        from .config import runtime_settings

        level = runtime_settings.app.log_level
    logger.remove()
    sink_id = logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, colorize=colorize)
    logger.info("Logger configured with level: {}", level.upper())
    return sink_id
