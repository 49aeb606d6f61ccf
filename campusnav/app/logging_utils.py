# campusnav/app/logging_utils.py
import logging
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from .settings import settings


def _parse_level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger() -> logging.Logger:
    logger = logging.getLogger("campusnav")

    # Avoid stacking handlers under reloaders
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(_parse_level(settings.log_level))
    logger.propagate = False

    sh = logging.StreamHandler()
    sh.setFormatter(jsonlogger.JsonFormatter())
    logger.addHandler(sh)

    logger._configured = True  # type: ignore[attr-defined]
    return logger


LOGGER: Optional[logging.Logger] = None


def log_event(event: str, **fields: Any) -> None:
    global LOGGER
    if LOGGER is None:
        LOGGER = get_logger()
    LOGGER.info(event, extra={"event": event, **fields})
