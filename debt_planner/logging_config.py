"""Logging setup shared by the CLI and the web API.

Both front ends call :func:`configure_logging` once at start-up with the
level and optional log file from :class:`~debt_planner.config.Settings`.
Library modules only ever use ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("werkzeug",)


def resolve_level(level: Optional[str]) -> Optional[int]:
    """Map a level name such as ``"debug"`` to its number, or None if unknown."""
    value = logging.getLevelName((level or "INFO").strip().upper())
    return value if isinstance(value, int) else None


def configure_logging(
    level: Optional[str] = "INFO",
    file_path: Optional[str] = None,
    quiet: Sequence[str] = QUIET_LOGGERS,
) -> int:
    """Route planner logs to stderr (and ``file_path`` when given).

    An unknown level name falls back to INFO with a warning. Returns the
    numeric level in effect.
    """
    numeric_level = resolve_level(level)
    unknown = numeric_level is None
    if unknown:
        numeric_level = logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    # force: a second call (tests, reloads) replaces the earlier handlers
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers, force=True)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    if unknown:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", level)
    return numeric_level
