"""Logging configuration for the command line.

Library modules only create loggers; handlers are installed here, from
``jellyfin_pg.cli`` at startup.
"""

import logging
import os

from rich.logging import RichHandler


def setup_logging(level: str | None = None) -> None:
    """Initialize application logging.

    - Level is taken from the ``LOG_LEVEL`` environment variable if not provided.
    - Output goes to stderr through ``RichHandler``.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    root_logger = logging.getLogger()

    # Configure handlers once to avoid duplicates on repeated calls
    if not root_logger.handlers:
        logging.basicConfig(
            level=log_level,
            format="%(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[RichHandler(show_path=False)],
        )

    root_logger.setLevel(log_level)

    # Only show SQL engine logs when DEBUG is enabled at the root
    sqlalchemy_engine_level = (
        logging.DEBUG if root_logger.level == logging.DEBUG else logging.WARNING
    )
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_engine_level)
