# prready/logging.py
"""
Logging setup shared by the prready entrypoint and its modules.

Usage:
    from prready.logging import setup_logging, get_logger

    setup_logging(level="DEBUG")
    log = get_logger(__name__)
    log.debug("Resolved %d mentions", n)

Env:
    LOG_LEVEL: Optional. Used when no explicit level is passed.

Diagnostics go to stderr so that stdout only carries the lines a CI log
reader expects (destination, message, response status).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LEVEL_CHOICES = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]


def _coerce_level(level: Optional[Union[str, int]]) -> int:
    """Map an int level, a level name or None (LOG_LEVEL / WARNING) to an int."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or "WARNING").upper()
    if name not in LEVEL_CHOICES:
        return logging.WARNING
    return logging.getLevelName(name)


def setup_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: str = "%(levelname)-8s %(name)s: %(message)s",
) -> logging.Logger:
    """Install a single stderr handler on the root logger and return it.

    Re-initialising replaces the previous handler, so calling ``main()``
    repeatedly (as the tests do) never duplicates output.
    """
    lvl = _coerce_level(level)
    root = logging.getLogger()
    root.setLevel(lvl)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt))
    root.addHandler(handler)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger for the given module or name."""
    return logging.getLogger(name if name else "prready")


def set_verbosity(v: int) -> None:
    """Map -v counts onto the root level.

    v = 0 → leave the configured level alone
    v = 1 → INFO
    v ≥ 2 → DEBUG
    """
    if v <= 0:
        return
    logging.getLogger().setLevel(logging.INFO if v == 1 else logging.DEBUG)
