# codeseek/logging/__init__.py
"""Logging helpers: module loggers and message tags."""

from .logger import configure_logging, get_logger

__all__ = ["get_logger", "configure_logging"]
