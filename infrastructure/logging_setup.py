"""
Logging setup for the moviegraph.* loggers.

Modules log through `logging.getLogger("moviegraph.<area>")`; this installs a
single stream handler on the parent so every area shares one format. Safe to
call more than once (each Granian worker calls it on start up).
"""
import logging
from typing import IO, Optional


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
ROOT_LOGGER = "moviegraph"


def configure_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> logging.Logger:
    """Install (or replace) the moviegraph handler and set its level."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
