"""Logger names and console logging setup."""
from __future__ import annotations

import logging

SESSION_LOGGER_NAME = "aipa.session"
PROCESS_LOGGER_NAME = "aipa.process"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Configure root logging; ``debug`` only changes verbosity."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


__all__ = ["LOG_FORMAT", "PROCESS_LOGGER_NAME", "SESSION_LOGGER_NAME", "configure_logging"]
