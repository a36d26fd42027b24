import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_configured = False


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """
    Install a single stream handler on the root logger.

    Calling it again only adjusts the level.
    """
    global _configured

    if level is None:
        from .config import settings
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = _LEVELS.get(level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
