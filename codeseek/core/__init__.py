# codeseek/core/__init__.py
"""Core building blocks shared by every codeseek layer."""

from codeseek.core.exceptions import (
    BackendError,
    CodeseekError,
    ConfigError,
    ConfigNotFoundError,
    PathError,
    PersistenceError,
)
from codeseek.core.paths import CodeseekPaths

__all__ = [
    "CodeseekError",
    "ConfigError",
    "ConfigNotFoundError",
    "PathError",
    "BackendError",
    "PersistenceError",
    "CodeseekPaths",
]
