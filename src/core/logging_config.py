"""Logging setup for the API process."""

import logging

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure root logging once for the whole process.

    Uvicorn installs its own handlers on its loggers, so only the root
    logger is touched here.
    """
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    # SQL echo is too noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
