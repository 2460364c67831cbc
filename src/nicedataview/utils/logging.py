"""Logger lookup and opt-in console output for nicedataview.

Every module logs through ``get_logger(__name__)``, so records land under the
``nicedataview`` logger. The package only adds a ``NullHandler``; records
propagate to whatever handlers the NiceGUI application configured. No files
are written.

What gets logged:

* DEBUG: sort toggle decisions, header link URLs, reader slices, prepared
  pagination state and renderer creation.
* WARNING: filter input that a filter factory rejected and that the grid
  dropped.

For a demo page, call ``configure_logging("DEBUG")`` before ``ui.run()`` or
set ``NICEDATAVIEW_LOG_LEVEL=DEBUG``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "nicedataview"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Attach a stderr handler to the ``nicedataview`` logger. The root logger is left alone.

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to NICEDATAVIEW_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to a standard format.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        Replace the handlers already on the logger. Otherwise a second call
        is a no-op when a stderr handler is present.
    """
    if level is None:
        level = os.environ.get("NICEDATAVIEW_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
