"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False

LOG_LEVEL_ENV = "PHRASE_HUNTER_LOG_LEVEL"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        return getattr(logging, normalized, logging.INFO)


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> None:
    """Initialise root logging handlers for the solver.

    Long searches log their phase timings and every answer found, so the
    handler is installed once and ``INFO`` is the default level.  The level
    can be overridden through ``PHRASE_HUNTER_LOG_LEVEL``.
    """

    global _CONFIGURED

    if _CONFIGURED and not force:
        return

    env_level = os.environ.get(LOG_LEVEL_ENV)
    resolved_level = _resolve_level(level if level is not None else env_level)

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("phrase_hunter").setLevel(resolved_level)
    _CONFIGURED = True


__all__ = ["configure_logging", "LOG_LEVEL_ENV"]
