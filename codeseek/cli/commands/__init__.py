# codeseek/cli/commands/__init__.py
"""CLI commands."""

from codeseek.cli.commands import config, index, search

__all__ = ["config", "index", "search"]
