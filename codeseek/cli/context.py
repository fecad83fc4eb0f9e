# codeseek/cli/context.py
"""
Shared CLI state.

The root callback stores global options here; commands load configuration
through it so overrides and logging setup happen in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from codeseek.core.config import CodeseekConfig, ensure_user_config, load_config
from codeseek.core.paths import CodeseekPaths
from codeseek.logging.logger import configure_logging, get_logger
from codeseek.logging.tags import CLI

logger = get_logger(__name__)


@dataclass
class CLIContext:
    config_path: Optional[Path] = None
    base_url: Optional[str] = None
    token: Optional[str] = None
    verbose: bool = False

    def load_config(self) -> CodeseekConfig:
        """
        Load configuration with command-line overrides applied.

        Creates the workspace and a default config file on first use when
        no explicit config path was given.

        Raises:
            ConfigError: Missing or invalid configuration.
        """
        path = self.config_path
        if path is None:
            path = ensure_user_config()

        config = load_config(path, base_url=self.base_url, token=self.token)

        configure_logging(
            level="DEBUG" if self.verbose else config.log_level,
            log_file=CodeseekPaths.log_file(),
            force=True,
        )
        logger.debug(f"{CLI} Using config {path}")
        return config


__all__ = ["CLIContext"]
