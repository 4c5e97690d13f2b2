"""Logging setup."""

import logging

from carwash.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Configure the root logger once for the process."""
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL echo is controlled by the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
