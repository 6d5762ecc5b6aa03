from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the 'todo_api' logger hierarchy.

    A stream handler is attached only once so repeated app construction (tests,
    reloads) does not duplicate output. Records still propagate, so uvicorn or
    pytest handlers see them too.
    """
    logger = logging.getLogger("todo_api")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
