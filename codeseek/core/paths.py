# codeseek/core/paths.py
"""
Workspace locations.

All on-disk state lives under one workspace directory:

    ~/.codeseek/
        config.yaml      user configuration
        data/
            projects.json  project -> blob names index
        logs/
            codeseek.log

Set CODESEEK_HOME to relocate the workspace (tests do this).
"""

from __future__ import annotations

import os
from pathlib import Path


class CodeseekPaths:
    """Single source of truth for workspace paths."""

    @staticmethod
    def workspace() -> Path:
        override = os.getenv("CODESEEK_HOME")
        if override:
            return Path(override).expanduser()
        return Path.home() / ".codeseek"

    @classmethod
    def config(cls) -> Path:
        return cls.workspace() / "config.yaml"

    @classmethod
    def data_dir(cls) -> Path:
        return cls.workspace() / "data"

    @classmethod
    def projects_file(cls) -> Path:
        return cls.data_dir() / "projects.json"

    @classmethod
    def log_file(cls) -> Path:
        return cls.workspace() / "logs" / "codeseek.log"

    @classmethod
    def ensure_workspace(cls) -> Path:
        """Create the workspace and data directories if missing."""
        workspace = cls.workspace()
        workspace.mkdir(parents=True, exist_ok=True)
        cls.data_dir().mkdir(parents=True, exist_ok=True)
        return workspace


__all__ = ["CodeseekPaths"]
