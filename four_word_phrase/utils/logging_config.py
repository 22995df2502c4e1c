"""Root logging setup for the command line, scripts and UI."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from ..core.errors import ConfigurationError

LOG_LEVEL_ENV = "FOUR_WORD_PHRASE_LOG_LEVEL"
PACKAGE_LOGGER = "four_word_phrase"

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONFIGURED = False

LevelLike = Union[str, int, None]


def resolve_level(level: LevelLike, *, default: int = logging.INFO) -> int:
    """Turn a level name or number into a ``logging`` level.

    Blank values fall back to ``default``; unknown names raise
    :class:`ConfigurationError` instead of silently logging at some other level.
    """

    if level is None:
        return default
    if isinstance(level, bool):
        raise ConfigurationError(f"Invalid log level {level!r}")
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if not text:
        return default
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(
            f"Unknown log level {level!r}; expected DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return resolved


def configure_logging(level: LevelLike = None, *, force: bool = False) -> int:
    """Install a root handler once and set the package logger level.

    ``level`` wins over ``$FOUR_WORD_PHRASE_LOG_LEVEL``, which wins over INFO.
    Later calls are no-ops unless ``force`` is set.  Returns the level of the
    ``four_word_phrase`` logger.
    """

    global _CONFIGURED

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = resolve_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV))
    if _CONFIGURED and not force:
        return package_logger.getEffectiveLevel()

    logging.basicConfig(level=resolved, format=_FORMAT, force=force)
    package_logger.setLevel(resolved)
    _CONFIGURED = True
    return resolved


__all__ = ["LOG_LEVEL_ENV", "PACKAGE_LOGGER", "configure_logging", "resolve_level"]
