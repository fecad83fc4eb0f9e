# codeseek/cli/commands/config.py
"""
Config commands.

Usage:
    codeseek config show
    codeseek config path
"""

from __future__ import annotations

import yaml
import typer

from codeseek.cli.context import CLIContext
from codeseek.cli.ui import ui
from codeseek.core.config import ensure_user_config
from codeseek.core.exceptions import ConfigError


def show(ctx: typer.Context) -> None:
    """Show the resolved configuration (credentials masked)."""
    state: CLIContext = ctx.obj
    try:
        config = state.load_config()
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    ui.header("codeseek configuration", str(state.config_path or ensure_user_config()))
    ui.syntax(yaml.safe_dump(config.redacted(), default_flow_style=False, sort_keys=False))


def path(ctx: typer.Context) -> None:
    """Print the config file location, creating a default one if missing."""
    state: CLIContext = ctx.obj
    typer.echo(str(state.config_path or ensure_user_config()))
