"""Logging setup for the verifier service

Everything logs through children of the ``verified_id_verifier`` logger, so a
single handler on that logger covers the whole package. The level comes from
the caller, or from VERIFIER_LOG_LEVEL when the caller passes none.
"""

import logging
import os
from typing import Optional, Union

PACKAGE_LOGGER = "verified_id_verifier"
LOG_LEVEL_VARIABLE = "VERIFIER_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def resolve_level(level: Union[int, str, None] = None) -> int:
    """
    Turn a level name or number into a logging level.

    Falls back to VERIFIER_LOG_LEVEL, then INFO. Unknown names raise
    ValueError so a typo in the environment does not silence the service.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_VARIABLE) or logging.INFO
    if isinstance(level, int):
        return level

    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """
    Attach one stream handler to the package logger and set its level.

    Calling it again only changes the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(level))

    if not any(getattr(handler, "_verifier_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._verifier_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False

    return logger
