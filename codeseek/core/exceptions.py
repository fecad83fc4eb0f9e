# codeseek/core/exceptions.py
"""
Exception hierarchy for codeseek.

Containment rules:
- ReadError is per file: logged, the file is skipped.
- BackendError is per batch or per query: retried when retryable,
  otherwise the batch (or query) fails.
- PathError, NoFilesFoundError and PersistenceError end an indexing run.
"""

from __future__ import annotations

from typing import Optional


class CodeseekError(Exception):
    """Base class for all codeseek errors."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigError(CodeseekError):
    """Configuration is invalid."""


class ConfigNotFoundError(ConfigError):
    """Configuration file does not exist."""


# ---------------------------------------------------------------------------
# Paths and scanning
# ---------------------------------------------------------------------------


class PathError(CodeseekError):
    """Project root cannot be used."""


class InvalidPathError(PathError):
    """Path is empty or cannot be resolved to an absolute form."""


class PathNotFoundError(PathError):
    """Project root does not exist."""


class RootNotADirectoryError(PathError):
    """Project root exists but is not a directory."""


class NoFilesFoundError(CodeseekError):
    """Scan produced no indexable files."""


class ReadError(CodeseekError):
    """A single file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# Remote backend
# ---------------------------------------------------------------------------


class BackendError(CodeseekError):
    """A request to the retrieval backend failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(BackendError):
    """Connection failure or timeout. Retryable."""


class ServerError(BackendError):
    """Backend answered with a 5xx status. Retryable."""


class ClientError(BackendError):
    """Backend rejected the request (4xx). Not retryable."""


class BackendResponseError(BackendError):
    """Backend answered 2xx with a body we cannot use. Not retryable."""


# ---------------------------------------------------------------------------
# Persistence and search
# ---------------------------------------------------------------------------


class PersistenceError(CodeseekError):
    """The project index could not be written."""


class SearchError(CodeseekError):
    """A retrieval query could not be answered."""


__all__ = [
    "CodeseekError",
    "ConfigError",
    "ConfigNotFoundError",
    "PathError",
    "InvalidPathError",
    "PathNotFoundError",
    "RootNotADirectoryError",
    "NoFilesFoundError",
    "ReadError",
    "BackendError",
    "NetworkError",
    "ServerError",
    "ClientError",
    "BackendResponseError",
    "PersistenceError",
    "SearchError",
]
