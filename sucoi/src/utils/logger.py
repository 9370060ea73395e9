"""
Sucoi - Logging
================
Pre-configured logger factory so every module logs in the same format.

Messages start with a subsystem tag (``[AUTH]``, ``[CHAT]``, ``[GOALS]``,
``[HISTORY]``, ``[DB]``, ``[API]``).  ``TaggedFormatter`` lifts that tag
into its own aligned column so a single subsystem can be grepped out of
the stream; untagged messages get ``APP``::

    2026-10-19 03:48:24 | INFO     | CHAT    | sucoi.src.core.companion | Reply sent

Logging verbosity is driven by ``settings.ENV``:
  • ``"dev"``  → DEBUG level  (maximum detail)
  • ``"prod"`` → WARNING level (errors & warnings only)

User-supplied text (chat messages, passwords, security answers) is never
logged; only lengths and identifiers are.

Usage:
    from sucoi.src.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("[CHAT] Reply sent")
"""

import logging
import re
import sys

from sucoi.config.settings import settings

# ── Resolve default level from environment mode ───────────────────────
_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}
_DEFAULT_LEVEL = _ENV_LEVEL_MAP.get(settings.ENV, logging.INFO)

_TAG_PATTERN = re.compile(r"^\[([A-Z]+)\]\s*")
DEFAULT_TAG = "APP"


class TaggedFormatter(logging.Formatter):
    """Formatter exposing the leading ``[TAG]`` of a message as ``%(tag)s``."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        match = _TAG_PATTERN.match(record.message)
        record.tag = match.group(1) if match else DEFAULT_TAG
        if match:
            record.message = record.message[match.end():]
        return super().formatMessage(record)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Create and return a named logger writing tagged lines to stdout.

    Args:
        name:  Typically ``__name__`` of the calling module.
        level: Explicit logging level override.
               If *None*, the level is derived from ``settings.ENV``.
    """
    resolved_level = level if level is not None else _DEFAULT_LEVEL
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(resolved_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(TaggedFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(tag)-7s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(console_handler)

        # Root handlers would print every line twice
        logger.propagate = False

    return logger
