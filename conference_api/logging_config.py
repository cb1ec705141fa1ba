# conference_api/logging_config.py

"""
Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; ``configure_logging``
is called once from the application startup (and from the management CLI).
"""

import logging
from typing import Optional

from conference_api.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _parse_level(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None, force: bool = False) -> logging.Logger:
    """
    Attach a single stream handler to the root logger and return the
    package logger. Calling it again is a no-op unless ``force`` is set.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        return logging.getLogger("conference_api")

    logging.basicConfig(
        level=_parse_level(level or get_settings().LOG_LEVEL),
        format=LOG_FORMAT,
        force=force,
    )
    # keep request-level noise from the HTTP client out of INFO logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("conference_api")
