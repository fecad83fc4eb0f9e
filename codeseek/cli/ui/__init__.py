# codeseek/cli/ui/__init__.py
"""
CLI UI components.

Usage:
    from codeseek.cli.ui import ui

    ui.header("Index")
    ui.success("Done!")
"""

from __future__ import annotations

from .console import console
from .output import OutputMixin


class UI(OutputMixin):
    """Unified UI helpers backed by Rich."""

    pass


# Singleton instance
ui = UI()

__all__ = ["ui", "UI", "console"]
