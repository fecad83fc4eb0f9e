# codeseek/index/state.py
"""
Persistent record of which blobs each project has in the backend.

File format (projects.json):
    {
      "/home/me/project": ["<blob name>", "<blob name>", ...],
      ...
    }

Rules:
- load() never fails on a missing or unreadable file, it returns {}
- save() writes a temp file next to the target and renames it over the
  target, so a crash leaves either the old file or the new one
- No locking: one writer at a time is assumed. Two concurrent runs on the
  same project can race and the last save wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Protocol, runtime_checkable

from codeseek.core.exceptions import PersistenceError
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import STATE

logger = get_logger(__name__)

ProjectIndex = Dict[str, List[str]]


@runtime_checkable
class ProjectIndexStore(Protocol):
    """Storage for the project -> blob names mapping."""

    def load(self) -> ProjectIndex:
        """Return the whole mapping. Missing or corrupt storage reads as empty."""
        ...

    def save(self, projects: ProjectIndex) -> None:
        """Replace the whole mapping. Raises PersistenceError on failure."""
        ...


class JsonProjectIndexStore:
    """
    JSON-file implementation of ProjectIndexStore.

    Usage:
        store = JsonProjectIndexStore(CodeseekPaths.projects_file())
        projects = store.load()
        projects["/path/to/project"] = ["abc...", "def..."]
        store.save(projects)
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> ProjectIndex:
        if not self.path.exists():
            logger.debug(f"{STATE} No project index at {self.path}, starting empty")
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"{STATE} Failed to load project index {self.path}: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"{STATE} Project index {self.path} is not a mapping, ignoring it")
            return {}

        projects: ProjectIndex = {}
        for project, names in raw.items():
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                logger.warning(f"{STATE} Dropping malformed entry for project {project}")
                continue
            projects[project] = list(dict.fromkeys(names))
        return projects

    def save(self, projects: ProjectIndex) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(projects, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Failed to save project index to {self.path}: {e}") from e

        logger.debug(f"{STATE} Saved {len(projects)} projects to {self.path}")


__all__ = ["ProjectIndex", "ProjectIndexStore", "JsonProjectIndexStore"]
