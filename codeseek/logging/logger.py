# codeseek/logging/logger.py
"""
Central logger setup.

Every module does:

    from codeseek.logging.logger import get_logger
    logger = get_logger(__name__)

Handlers are attached once, to the package root logger ("codeseek"), by
configure_logging(). Until then records propagate to whatever the host
application configured.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "codeseek"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every record."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the codeseek namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.getenv("CODESEEK_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str | int | None = None,
    log_file: Optional[Path] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Attach stderr (and optionally file) handlers to the codeseek logger.

    Safe to call repeatedly; only the first call (or a call with force=True)
    installs handlers.

    Args:
        level: Level name or number. Defaults to $CODESEEK_LOG_LEVEL or INFO.
        log_file: Optional path of a log file to append to.
        force: Replace previously installed handlers.

    Returns:
        The configured package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_resolve_level(level))

    if _configured and not force:
        return root

    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    # stderr keeps stdout clean for command output
    stream_handler = FlushingStreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    _configured = True
    return root


__all__ = ["get_logger", "configure_logging", "FlushingStreamHandler", "ROOT_LOGGER_NAME"]
