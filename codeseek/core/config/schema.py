# codeseek/core/config/schema.py
"""
Pydantic schema for codeseek configuration.

Rules:
- Strict validation, no unknown keys
- Base URL always carries a scheme and never a trailing slash
- Extensions are lowercase and dot-prefixed
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codeseek.core.paths import CodeseekPaths
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_TEXT_EXTENSIONS = [
    ".py", ".js", ".ts", ".jsx", ".tsx", ".java", ".go", ".rs", ".cpp", ".c",
    ".h", ".hpp", ".cs", ".rb", ".php", ".md", ".txt", ".json", ".yaml", ".yml",
    ".toml", ".xml", ".html", ".css", ".scss", ".sql", ".sh", ".bash",
]

DEFAULT_EXCLUDE_PATTERNS = [
    ".venv", "venv", ".env", "env", "node_modules", ".git", ".svn", ".hg",
    "__pycache__", ".pytest_cache", ".mypy_cache", ".tox", ".eggs", "*.egg-info",
    "dist", "build", ".idea", ".vscode", ".DS_Store", "*.pyc", "*.pyo", "*.pyd",
    ".Python", "pip-log.txt", "pip-delete-this-directory.txt", ".coverage",
    "htmlcov", ".gradle", "target", "bin", "obj",
]

_SENSITIVE_HEADER_HINTS = ("auth", "key", "token")


def mask_header_value(name: str, value: str) -> str:
    """Hide credentials when a header has to be displayed or logged."""
    if any(hint in name.lower() for hint in _SENSITIVE_HEADER_HINTS):
        return "***"
    return value[:10] + ("..." if len(value) > 10 else "")


class CodeseekConfig(BaseModel):
    """
    Everything the indexing pipeline and search delegate need.

    Examples:
        >>> cfg = CodeseekConfig(base_url="api.example.com", token="t")
        >>> cfg.base_url
        'https://api.example.com'
    """

    base_url: str = Field(..., description="Retrieval backend base URL")
    token: str = Field(..., description="Bearer token for the backend")

    batch_size: int = Field(default=10, ge=1, description="Blobs per upload request")
    max_lines_per_blob: int = Field(default=800, ge=1, description="Lines per chunk")

    upload_timeout: float = Field(default=30.0, gt=0, description="Seconds per upload attempt")
    search_timeout: float = Field(default=60.0, gt=0, description="Seconds per search attempt")

    custom_headers: dict[str, str] = Field(default_factory=dict)

    max_depth: int = Field(default=30, ge=0, description="Maximum directory recursion depth")
    follow_symlinks: bool = False
    text_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_TEXT_EXTENSIONS))
    exclude_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))

    index_storage_path: Optional[Path] = Field(
        default=None,
        description="Directory holding projects.json (defaults to the workspace data dir)",
    )
    log_level: str = "INFO"

    model_config = ConfigDict(extra="forbid")

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_url must be configured")
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
            logger.debug(f"{CONFIG} Added https:// scheme to base_url: {v}")
        return v.rstrip("/")

    @field_validator("token")
    @classmethod
    def require_token(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("token must be configured")
        v = v.strip()
        if v.startswith("${") and v.endswith("}"):
            raise ValueError(f"token must be configured (environment variable {v[2:-1]} is not set)")
        return v

    @field_validator("text_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = f".{ext}"
            normalized.append(ext)
        return normalized

    @field_validator("custom_headers", mode="before")
    @classmethod
    def drop_invalid_headers(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, dict):
            logger.warning(f"{CONFIG} custom_headers must be a mapping, ignoring it")
            return {}

        valid: dict[str, str] = {}
        for name, value in v.items():
            if not isinstance(name, str) or not isinstance(value, str):
                logger.warning(f"{CONFIG} Invalid header format for '{name}': value must be a string, skipping")
                continue
            if not name.strip() or "\n" in name or "\r" in name:
                logger.warning(f"{CONFIG} Invalid header name: '{name}', skipping")
                continue
            valid[name] = value

        for name, value in valid.items():
            logger.debug(f"{CONFIG}   {name}: {mask_header_value(name, value)}")
        return valid

    @property
    def projects_file(self) -> Path:
        """Location of the persisted project index."""
        if self.index_storage_path is not None:
            return Path(self.index_storage_path).expanduser() / "projects.json"
        return CodeseekPaths.projects_file()

    def redacted(self) -> dict[str, Any]:
        """Config as a dict with credentials masked, for display."""
        data = self.model_dump(mode="json")
        data["token"] = "***"
        data["custom_headers"] = {
            k: mask_header_value(k, v) for k, v in self.custom_headers.items()
        }
        return data


__all__ = [
    "CodeseekConfig",
    "DEFAULT_TEXT_EXTENSIONS",
    "DEFAULT_EXCLUDE_PATTERNS",
    "mask_header_value",
]
