"""
Logging for the game core.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers; the CLI calls ``setup_logging`` once. Per-round
messages go through ``round_logger`` so every line carries its round id.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping, Optional, TextIO, Tuple

PACKAGE_LOGGER = "ceelo_fair"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# -v count → level; failed reveals and bad config always show
_VERBOSITY = (logging.WARNING, logging.INFO, logging.DEBUG)


def verbosity_level(verbose_count: int) -> int:
    if verbose_count <= 0:
        return _VERBOSITY[0]
    return _VERBOSITY[min(verbose_count, len(_VERBOSITY) - 1)]


def setup_logging(
    verbose_count: int = 0,
    logger_name: Optional[str] = PACKAGE_LOGGER,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach one stderr handler to the package logger (``logger_name=None``
    for root) and set its level from the -v count. Repeat calls only move
    the level.
    """
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(verbosity_level(verbose_count))

    if not any(getattr(h, "_ceelo_fair_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream=stream or sys.stderr)
        handler._ceelo_fair_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    return logger


class RoundLogAdapter(logging.LoggerAdapter):
    """Prefixes messages with ``[round <id>]`` and exposes the id as ``record.round_id``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        round_id = self.extra["round_id"]  # type: ignore[index]
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("round_id", round_id)
        kwargs["extra"] = extra
        return f"[round {round_id}] {msg}", kwargs


def round_logger(logger: logging.Logger, round_id: str) -> RoundLogAdapter:
    return RoundLogAdapter(logger, {"round_id": round_id})
