# codeseek/core/config/__init__.py
"""Configuration schema and loader."""

from codeseek.core.config.loader import (
    DEFAULT_CONFIG_PATH,
    ensure_user_config,
    load_config,
    load_config_dict,
)
from codeseek.core.config.schema import CodeseekConfig, mask_header_value
from codeseek.core.exceptions import ConfigError, ConfigNotFoundError

__all__ = [
    "CodeseekConfig",
    "ConfigError",
    "ConfigNotFoundError",
    "DEFAULT_CONFIG_PATH",
    "ensure_user_config",
    "load_config",
    "load_config_dict",
    "mask_header_value",
]
