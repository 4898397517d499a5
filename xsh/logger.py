"""Console logging for xsh.

All diagnostics go to standard error through the stdlib :mod:`logging`
package.  xsh uses its own ordered level scale instead of the five
standard levels::

    TRACE DEBUG RUN INFO DRY HINT NOTICE CMD USER WARN ERR ERROR CRIT TODO DIE

Each name maps to a numeric level so that the usual
``logger.log(level, ...)`` machinery filters on it; the names
themselves are only known to :class:`LevelTagFormatter`.  Records are
rendered as ``"%5s: %s"``; a multi-line message gets the level tag on
every line so that the output stays greppable.

Call :func:`setup_logging` once at start-up, then use :func:`log` (or a
child of :data:`logger`) everywhere else.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

LOG_SCALE = (
    "TRACE", "DEBUG", "RUN", "INFO", "DRY", "HINT", "NOTICE", "CMD",
    "USER", "WARN", "ERR", "ERROR", "CRIT", "TODO", "DIE",
)

DEFAULT_LOG_LEVEL = "INFO"

# DEBUG, INFO, WARN, ERROR and CRIT share the stdlib values
LEVELS: Dict[str, int] = {
    "TRACE": 5,
    "DEBUG": logging.DEBUG,
    "RUN": 15,
    "INFO": logging.INFO,
    "DRY": 21,
    "HINT": 22,
    "NOTICE": 25,
    "CMD": 26,
    "USER": 27,
    "WARN": logging.WARNING,
    "ERR": 35,
    "ERROR": logging.ERROR,
    "CRIT": logging.CRITICAL,
    "TODO": 55,
    "DIE": 60,
}

# Tags are applied by the formatter; global level names stay untouched
TAGS: Dict[int, str] = {value: name for name, value in LEVELS.items()}

logger = logging.getLogger("xsh")


class LevelTagFormatter(logging.Formatter):
    """Prefix every line of a message with the right-aligned level tag."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        tag = TAGS.get(record.levelno, record.levelname)
        lines = message.splitlines() or [""]
        return "\n".join(f"{tag:>5}: {line or ' '}" for line in lines)


def level_value(name: str) -> Optional[int]:
    """Return the numeric value for a level name or ``None`` if unknown."""
    return LEVELS.get(name.upper())


def setup_logging(level: str = DEFAULT_LOG_LEVEL, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the ``xsh`` logger to write tagged lines to ``stream``.

    Calling this again replaces the previous handler, which keeps test
    runs from stacking handlers on the shared logger.
    """
    value = level_value(level)
    if value is None:
        value = LEVELS[DEFAULT_LOG_LEVEL]
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(LevelTagFormatter())
    logger.addHandler(handler)
    logger.setLevel(value)
    logger.propagate = False
    return logger


def log(level: str, msg: str, *args, target: Optional[logging.Logger] = None) -> None:
    """Log ``msg`` under one of the :data:`LOG_SCALE` names.

    An unknown level name is itself reported and the message is then
    logged as ``DIE``, so both pass any configured threshold.
    """
    target = target or logger
    value = level_value(level)
    if value is None:
        streams = [h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        for stream in streams or [sys.stderr]:
            stream.write(f"  BUG: Unknown log level: {level}\n")
        value = LEVELS["DIE"]
    target.log(value, msg, *args)
