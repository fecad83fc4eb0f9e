# codeseek/core/config/loader.py
"""
Configuration loader for codeseek.

Responsibilities:
- Create the workspace and a default config on first run
- Load the user config (YAML)
- Expand ${ENV_VAR} placeholders
- Apply command-line overrides
- Validate via schema
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from codeseek.core.config.schema import CodeseekConfig
from codeseek.core.exceptions import ConfigError, ConfigNotFoundError
from codeseek.core.paths import CodeseekPaths
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def load_config_dict(path: Path) -> dict:
    """Read a YAML config file into a dict with env vars expanded."""
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    return _expand_env(data)


def ensure_user_config() -> Path:
    """
    Make sure the workspace and a user config file exist.

    The default config is copied on first run so users have something to edit.
    """
    CodeseekPaths.ensure_workspace()
    config_path = CodeseekPaths.config()

    if not config_path.exists():
        shutil.copyfile(DEFAULT_CONFIG_PATH, config_path)
        logger.info(f"{CONFIG} Created default config at {config_path}")

    return config_path


def load_config(
    path: Optional[Path] = None,
    *,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
) -> CodeseekConfig:
    """
    Load and validate codeseek configuration.

    Precedence:
    - command-line overrides (base_url, token)
    - config file
    - schema defaults

    Raises:
        ConfigNotFoundError: The config file does not exist.
        ConfigError: The file is not valid YAML or fails validation.
    """
    config_path = path or CodeseekPaths.config()
    logger.debug(f"{CONFIG} Loading config from {config_path}")
    data = load_config_dict(config_path)

    overrides = []
    if base_url:
        data["base_url"] = base_url
        overrides.append("base_url")
    if token:
        data["token"] = token
        overrides.append("token")
    if overrides:
        logger.info(f"{CONFIG} Configuration overrides: {', '.join(overrides)} (CLI)")

    try:
        config = CodeseekConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{e}") from e

    logger.info(f"{CONFIG} Configuration loaded from: {config_path}")
    return config


__all__ = ["load_config", "load_config_dict", "ensure_user_config", "DEFAULT_CONFIG_PATH"]
