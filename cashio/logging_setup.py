"""Logging configuration for the ``cashio`` package.

Library modules only call ``logging.getLogger(__name__)``. The CLI calls
``configure_logging`` once at startup to attach a single rich handler to the
package root logger.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "cashio"
LOG_LEVEL_ENV = "CASHIO_LOG_LEVEL"

_configured = False


def parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Convert a level name or number to a logging level.

    Falls back to ``default`` for None or unknown names.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return default


def configure_logging(level: int | str | None = None, config_level: str | None = None) -> None:
    """Configure the package logger exactly once.

    Args:
        level: Explicit level (e.g. from --verbose). Wins over everything else.
        config_level: Level from the config file, used when neither ``level``
            nor the CASHIO_LOG_LEVEL environment variable is set.
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or config_level
    numeric = parse_level(level)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)
    logger.addHandler(handler)
    # Avoid double emission via the root logger
    logger.propagate = False

    _configured = True
